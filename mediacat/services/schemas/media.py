# mediacat/services/schemas/media.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel
from mediacat.domain.enums.media_type import MediaType


class MediaCreate(BaseModel):
    relative_path: str
    base_path_id: int
    size: float                       # kB
    width: Optional[int] = None
    height: Optional[int] = None
    mark: Optional[int] = None        # 1..10
    description: str = ""
    media_type: MediaType = MediaType.unknown


class MediaPatch(BaseModel):
    """
    Partial update. Identity (relative_path, base_path_id) and media_type
    are immutable and therefore not part of the patch.
    """
    width: Optional[int] = None
    height: Optional[int] = None
    size: Optional[float] = None
    mark: Optional[int] = None
    description: Optional[str] = None
