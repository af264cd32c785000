from __future__ import annotations

from typing import Any, Mapping


def populate_metadata_attachments(
    metadata: Mapping[str, Any] | None = None,
    attachments: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge implicit attachment fields with caller metadata.

    Caller entries win on key collision. The result is always a fresh dict,
    empty when neither mapping is given.
    """
    populated: dict[str, Any] = {}
    for source in (attachments, metadata):
        if not source:
            continue
        for key, value in source.items():
            if not isinstance(key, str):
                raise TypeError(f"Metadata keys must be strings, got {type(key).__name__}")
            populated[key] = value
    return populated


__all__ = ["populate_metadata_attachments"]
