# mediacat/domain/entities/base_path.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path

from mediacat.common.path.safe import safe_join


@dataclass(frozen=True)
class BasePath:
    """
    A registered root directory. Media files are tracked relative to it:

        <path>/<media.relative_path>

    `path` is absolute and carries no trailing slash (except for '/').
    """
    id: int
    path: str
    description: str = ""

    def join(self, relative_path: str) -> Path:
        """Absolute location of a file below this root (never escapes it)."""
        return safe_join(self.path, relative_path)

    def as_dict(self):
        return asdict(self)
