from __future__ import annotations

from functools import lru_cache
from typing import Any

import httpx
from loguru import logger

from nocloud.models import FileBody, FileMetadata, UploadResponse
from nocloud.settings import NoCloudSettings, get_settings
from nocloud.storage import MediaStorage, Storage

PING_PATH = "/ping"

_UNSET: Any = object()


class NoCloud:
    """Entry point of the NoCloud client.

    Example::

        client = NoCloud()
        if await client.is_available():
            result = await client.storage.upload(Blob(data, "image/png"), {"owner": "42"})
            print(result.url)

    Instances hold configuration only, so a single one can serve any number
    of concurrent calls.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = _UNSET,
        transport: httpx.AsyncBaseTransport | None = None,
        settings: NoCloudSettings | None = None,
    ) -> None:
        api = (settings or get_settings()).api
        self.base_url = (base_url or api.resolved_base_url).rstrip("/")
        self.timeout = api.timeout_seconds if timeout is _UNSET else timeout
        self._transport = transport
        self._storage: Storage | None = None

    @property
    def storage(self) -> MediaStorage:
        if self._storage is None:
            self._storage = Storage(self.base_url, timeout=self.timeout, transport=self._transport)
        return self._storage

    async def is_available(self) -> bool:
        """Check whether nocloud is installed on the server.

        Returns:
            True when the ping endpoint answers with a success status. Any
            failure, including a malformed base URL, yields False instead of
            raising.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(f"{self.base_url}{PING_PATH}")
        except Exception as exc:
            logger.debug("Ping to {url} failed: {error}", url=self.base_url, error=str(exc))
            return False
        return response.is_success


@lru_cache(maxsize=1)
def get_client() -> NoCloud:
    return NoCloud()


async def is_available() -> bool:
    return await get_client().is_available()


async def upload(body: FileBody, metadata: FileMetadata | None = None) -> UploadResponse:
    return await get_client().storage.upload(body, metadata)


__all__ = ["PING_PATH", "NoCloud", "get_client", "is_available", "upload"]
