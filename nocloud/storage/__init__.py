"""Storage abstraction (presigned-URL uploads to a NoCloud server)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from nocloud.models import FileBody, FileMetadata, SignedUrlResponse, UploadResponse
from nocloud.storage.body import get_body_info
from nocloud.storage.client import SIGNED_URL_PATH, Storage


@runtime_checkable
class MediaStorage(Protocol):
    async def generate_signed_url(
        self, content_type: str, size: int, metadata: FileMetadata | None = None
    ) -> SignedUrlResponse:
        ...

    async def upload(self, body: FileBody, metadata: FileMetadata | None = None) -> UploadResponse:
        ...


__all__ = ["MediaStorage", "SIGNED_URL_PATH", "Storage", "get_body_info"]
