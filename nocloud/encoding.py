"""Base64 data-URI detection/decoding and MIME type normalization."""

from __future__ import annotations

import base64
import binascii
import re

from nocloud.exceptions import Base64DecodeError

_MIME_TOKEN = r"[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*"

# data:<type>/<subtype>[;param=value...];base64,<chars>
_DATA_URI_RE = re.compile(
    rf"^\s*data:(?P<mime>{_MIME_TOKEN}/{_MIME_TOKEN})"
    r"(?P<params>(?:;[^;,=]+=[^;,]*)*)"
    r";base64,(?P<data>.*)$",
    re.DOTALL | re.IGNORECASE,
)

_MIME_ESSENCE_RE = re.compile(rf"^{_MIME_TOKEN}/{_MIME_TOKEN}$")

_WHITESPACE_RE = re.compile(r"\s+")


def detect_base64_mime_type(value: str) -> str | None:
    """Return the MIME type declared by a base64 data URI, or None.

    Only the ``data:<type>;base64,`` marker counts; a string made solely of
    base64 alphabet characters is plain text.
    """
    match = _DATA_URI_RE.match(value)
    if match is None:
        return None
    return match.group("mime").lower()


def is_base64_data_uri(value: str) -> bool:
    return detect_base64_mime_type(value) is not None


def extract_base64_data(value: str) -> str:
    """Return the encoded characters that follow the data URI separator."""
    match = _DATA_URI_RE.match(value)
    if match is None:
        raise Base64DecodeError("Value is not a base64 data URI")
    return match.group("data")


def decode_base64(raw: str) -> bytes:
    """Decode standard-alphabet base64, ignoring embedded whitespace.

    Raises:
        Base64DecodeError: On characters outside the alphabet or bad padding.
    """
    compact = _WHITESPACE_RE.sub("", raw)
    if not compact:
        return b""
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise Base64DecodeError(
            f"Invalid base64 payload: {exc}", {"length": str(len(compact))}
        ) from exc


def normalize_mime_type(value: str | None) -> str | None:
    """Trim and lower-case a MIME type; None when empty or malformed.

    Parameters after ``;`` are kept, only the ``type/subtype`` essence is
    validated.
    """
    if not value:
        return None
    normalized = value.strip().lower()
    essence = normalized.split(";", 1)[0].strip()
    if not _MIME_ESSENCE_RE.match(essence):
        return None
    return normalized


__all__ = [
    "detect_base64_mime_type",
    "is_base64_data_uri",
    "extract_base64_data",
    "decode_base64",
    "normalize_mime_type",
]
