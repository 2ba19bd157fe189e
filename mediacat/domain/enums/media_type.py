from __future__ import annotations
from enum import StrEnum
from typing import Optional


class MediaType(StrEnum):
    unknown = "unknown"
    image = "image"
    video = "video"
    sound = "sound"

    @classmethod
    def from_stored(cls, value: Optional[str]) -> "MediaType":
        """Anything that is not image/video/sound (including '' and NULL) reads as unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.unknown
