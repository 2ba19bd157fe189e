# mediacat/domain/entities/tag.py
from __future__ import annotations

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class Category:
    """Top level of the taxonomy. `color` is lowercase hex with a leading "#"."""
    id: int
    name: str
    color: str
    description: str = ""

    def as_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Tag:
    """
    A tag always belongs to exactly one Category.
    The DB enforces that (name, category_id) is unique.
    """
    id: int
    name: str
    category_id: int
    description: str = ""

    def as_dict(self):
        return asdict(self)
