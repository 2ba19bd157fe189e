# mediacat/domain/ports/registries.py
from __future__ import annotations

from typing import Optional, Protocol

from sqlalchemy.orm import Session

from mediacat.domain.entities.base_path import BasePath
from mediacat.domain.entities.tag import Category, Tag


class CategoryLookup(Protocol):
    """What TagRegistry needs from the category side."""
    def get(self, category_id: int, *, db: Optional[Session] = None) -> Category: ...


class BasePathLookup(Protocol):
    """What MediaCatalog needs from the base-path side."""
    def get(self, base_path_id: int, *, db: Optional[Session] = None) -> BasePath: ...


class TagLookup(Protocol):
    """What MediaCatalog needs from the tag side."""
    def get(self, tag_id: int, *, db: Optional[Session] = None) -> Tag: ...
