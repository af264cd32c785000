from __future__ import annotations

from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from nocloud.exceptions import NoCloudAPIError, NoCloudResourceIsNotFound
from nocloud.metadata import populate_metadata_attachments
from nocloud.models import Blob, FileBody, FileMetadata, SignedUrlResponse, UploadResponse
from nocloud.storage.body import get_body_info

SIGNED_URL_PATH = "/storage.requestSignedUrl"


class Storage:
    """Presigned-URL uploads against a NoCloud server.

    Every request opens its own ``httpx.AsyncClient``; nothing is shared
    between calls, so concurrent uploads are independent.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def generate_signed_url(
        self,
        content_type: str,
        size: int,
        metadata: FileMetadata | None = None,
        *,
        attachments: FileMetadata | None = None,
    ) -> SignedUrlResponse:
        """Request a signed URL for uploading a file.

        Args:
            content_type: The MIME type of the file.
            size: The size of the file in bytes.
            metadata: Optional metadata associated with the file.
            attachments: Implicit attachment fields merged under ``metadata``.

        Returns:
            The upload URL together with the permanent media reference.

        Raises:
            NoCloudResourceIsNotFound: If the server cannot be reached or does
                not answer with a success status.
            NoCloudAPIError: If the server reports that signing failed.
        """
        request_body: dict[str, Any] = {
            "contentType": content_type,
            "size": size,
            "metadata": populate_metadata_attachments(metadata, attachments),
        }
        url = self._url(SIGNED_URL_PATH)
        logger.debug("Requesting signed url ({content_type}, {size} bytes)", content_type=content_type, size=size)
        try:
            async with self._client() as client:
                response = await client.post(url, json=request_body)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Signed url request failed: {error}", error=str(exc))
            raise NoCloudResourceIsNotFound() from exc

        if not response.is_success:
            logger.warning("Signed url endpoint answered {status}", status=response.status_code)
            raise NoCloudResourceIsNotFound(response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise NoCloudAPIError("Failed to generate signed url", 500, {"reason": "invalid json"}) from exc

        if not isinstance(data, dict) or not data.get("ok"):
            raise NoCloudAPIError("Failed to generate signed url", 500)

        try:
            return SignedUrlResponse.model_validate(data.get("payload") or {})
        except ValidationError as exc:
            raise NoCloudAPIError(
                "Failed to generate signed url", 500, {"reason": "invalid payload"}
            ) from exc

    async def upload(self, body: FileBody, metadata: FileMetadata | None = None) -> UploadResponse:
        """Upload a file through a presigned URL.

        Args:
            body: A Blob, a byte buffer, or a string (base64 data URIs are
                decoded, other strings are uploaded as UTF-8 text).
            metadata: Optional metadata associated with the file.

        Returns:
            The media id and permanent URL of the uploaded file.

        Raises:
            UnsupportedBodyTypeError: If ``body`` has an unsupported type.
            NoCloudAPIError: If signing or the upload itself fails.
            NoCloudResourceIsNotFound: If signing is unavailable.
        """
        info = get_body_info(body)
        attachments = {"filename": body.name} if isinstance(body, Blob) and body.name else None
        signed = await self.generate_signed_url(
            info.content_type,
            info.size,
            metadata,
            attachments=attachments,
        )

        async with self._client() as client:
            response = await client.put(
                signed.upload_url,
                content=info.payload,
                headers={"Content-Length": str(info.size)},
            )

        if not response.is_success:
            try:
                error_text = response.text
            except (httpx.HTTPError, UnicodeDecodeError):
                error_text = ""
            logger.warning(
                "Upload of media {media_id} failed with {status}",
                media_id=signed.media_id,
                status=response.status_code,
            )
            raise NoCloudAPIError(
                error_text or response.reason_phrase,
                response.status_code,
                {"media_id": signed.media_id},
            )

        logger.debug("Uploaded media {media_id}", media_id=signed.media_id)
        return UploadResponse(id=signed.media_id, url=signed.media_url)


__all__ = ["SIGNED_URL_PATH", "Storage"]
