# mediacat/domain/entities/links/media_tag_link.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MediaTagLink:
    """
    Join entity connecting a MediaFile and a Tag.
    DB enforces that (media_id, tag_id) is unique.
    """
    id: int
    media_id: int
    tag_id: int
