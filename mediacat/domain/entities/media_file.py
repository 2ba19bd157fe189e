# mediacat/domain/entities/media_file.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Optional, Tuple

from mediacat.domain.enums.media_type import MediaType


@dataclass(frozen=True)
class MediaFile:
    """
    A file indexed under a BasePath.

    Identity is the pair (base_path_id, relative_path); `relative_path`
    carries no leading or trailing '/'. `size` is in kB. `mark` is an
    optional 1..10 rating.
    """
    id: int
    relative_path: str
    base_path_id: int
    size: float
    width: Optional[int] = None
    height: Optional[int] = None
    mark: Optional[int] = None
    description: str = ""
    media_type: MediaType = MediaType.unknown

    def identity_key(self) -> Tuple[int, str]:
        return (self.base_path_id, self.relative_path)

    def as_dict(self):
        return asdict(self)
