from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class Blob:
    """Binary data with a declared MIME type; a named Blob is a file."""

    data: bytes
    type: str = ""
    name: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Path | str, content_type: str | None = None) -> "Blob":
        source = Path(path)
        guessed, _ = mimetypes.guess_type(source.name)
        return cls(
            data=source.read_bytes(),
            type=content_type or guessed or "",
            name=source.name,
        )


FileBody = Union[Blob, bytes, bytearray, memoryview, str]
FileMetadata = Mapping[str, Any]


@dataclass(frozen=True)
class NormalizedBody:
    content_type: str
    size: int
    payload: bytes

    def __post_init__(self) -> None:
        if self.size != len(self.payload):
            raise ValueError(
                f"size {self.size} does not match payload length {len(self.payload)}"
            )


class SignedUrlResponse(BaseModel):
    """Payload of a successful ``storage.requestSignedUrl`` call.

    Older servers name the upload URL ``url`` instead of ``uploadUrl``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    upload_url: str = Field(
        validation_alias=AliasChoices("uploadUrl", "url", "upload_url"),
        description="Short-lived presigned PUT URL",
    )
    media_url: str = Field(alias="mediaUrl", description="Permanent media URL")
    media_id: str = Field(alias="mediaId", description="Permanent media identifier")
    expires_at: Optional[Any] = Field(default=None, alias="expiresAt")


@dataclass(frozen=True)
class UploadResponse:
    id: str
    url: str


__all__ = [
    "Blob",
    "FileBody",
    "FileMetadata",
    "NormalizedBody",
    "SignedUrlResponse",
    "UploadResponse",
]
