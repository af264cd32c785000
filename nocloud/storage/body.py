from __future__ import annotations

from typing import Any

from loguru import logger

from nocloud.encoding import (
    decode_base64,
    detect_base64_mime_type,
    extract_base64_data,
    normalize_mime_type,
)
from nocloud.exceptions import UnsupportedBodyTypeError
from nocloud.models import Blob, NormalizedBody

OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain"


def _from_blob(body: Blob) -> NormalizedBody:
    content_type = normalize_mime_type(body.type) or OCTET_STREAM
    return NormalizedBody(content_type=content_type, size=body.size, payload=body.data)


def _from_buffer(body: bytes | bytearray | memoryview) -> NormalizedBody:
    payload = body if isinstance(body, bytes) else bytes(body)
    return NormalizedBody(content_type=OCTET_STREAM, size=len(payload), payload=payload)


def _from_string(body: str) -> NormalizedBody:
    detected_type = detect_base64_mime_type(body)
    if detected_type:
        decoded = decode_base64(extract_base64_data(body))
        logger.debug("Decoded base64 body ({content_type}, {size} bytes)", content_type=detected_type, size=len(decoded))
        return NormalizedBody(content_type=detected_type, size=len(decoded), payload=decoded)
    encoded = body.encode("utf-8")
    return NormalizedBody(content_type=TEXT_PLAIN, size=len(encoded), payload=encoded)


def get_body_info(body: Any) -> NormalizedBody:
    """Extract content type, size and binary payload from an upload body.

    Base64 data URIs are decoded to their binary content; any other string
    is sent as UTF-8 text.

    Raises:
        UnsupportedBodyTypeError: If ``body`` is not a Blob, a byte buffer or
            a string.
        Base64DecodeError: If a data URI carries a malformed payload.
    """
    if isinstance(body, Blob):
        return _from_blob(body)
    if isinstance(body, (bytes, bytearray, memoryview)):
        return _from_buffer(body)
    if isinstance(body, str):
        return _from_string(body)
    raise UnsupportedBodyTypeError(type(body).__name__)


__all__ = ["OCTET_STREAM", "TEXT_PLAIN", "get_body_info"]
