"""NoCloud client - availability checks and presigned-URL uploads.

Typical use::

    from nocloud import Blob, NoCloud

    client = NoCloud()
    result = await client.storage.upload(Blob(png_bytes, "image/png"))
"""

from loguru import logger

from .client import NoCloud, get_client, is_available, upload
from .exceptions import (
    Base64DecodeError,
    ConfigurationError,
    NoCloudAPIError,
    NoCloudError,
    NoCloudResourceIsNotFound,
    UnsupportedBodyTypeError,
)
from .models import Blob, FileBody, FileMetadata, NormalizedBody, SignedUrlResponse, UploadResponse

# Silent until the host application calls setup_logging or logger.enable("nocloud").
logger.disable("nocloud")

__all__ = [
    "NoCloud",
    "get_client",
    "is_available",
    "upload",
    "Blob",
    "FileBody",
    "FileMetadata",
    "NormalizedBody",
    "SignedUrlResponse",
    "UploadResponse",
    "NoCloudError",
    "NoCloudAPIError",
    "NoCloudResourceIsNotFound",
    "UnsupportedBodyTypeError",
    "Base64DecodeError",
    "ConfigurationError",
]
