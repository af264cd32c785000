from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from nocloud.client import NoCloud
from nocloud.settings import NoCloudSettings

BASE_URL = "https://nocloud"
UPLOAD_URL = "https://r2.example.com/bucket/media-1?X-Amz-Signature=abc"


@pytest.fixture()
def settings() -> NoCloudSettings:
    return NoCloudSettings()


@pytest.fixture()
def make_client(settings: NoCloudSettings) -> Callable[..., NoCloud]:
    """Build a NoCloud client whose requests are answered by ``handler``."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> NoCloud:
        return NoCloud(BASE_URL, transport=httpx.MockTransport(handler), settings=settings)

    return _make


@pytest.fixture()
def signed_envelope() -> Callable[..., dict[str, Any]]:
    """Successful ``storage.requestSignedUrl`` response body."""

    def _envelope(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "uploadUrl": UPLOAD_URL,
            "mediaUrl": "https://cdn.example.com/media-1.png",
            "mediaId": "media-1",
        }
        payload.update(overrides)
        return {"ok": True, "payload": payload}

    return _envelope
