# tests/services/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

from mediacat.domain.enums.media_type import MediaType
from mediacat.services.catalog import Catalog
from mediacat.services.schemas import CategoryCreate, MediaCreate, TagCreate


@pytest.fixture()
def catalog(db_engine) -> Catalog:
    """All four registries over the per-test engine (each call commits for real)."""
    return Catalog.from_engine(db_engine)


@pytest.fixture()
def media_root(tmp_path) -> Path:
    root = tmp_path / "library"
    root.mkdir()
    return root


@pytest.fixture()
def base_path(catalog, media_root):
    return catalog.base_paths.create(str(media_root), "main library")


@pytest.fixture()
def category(catalog):
    return catalog.categories.create(CategoryCreate(name="Places", color="#00AAFF"))


@pytest.fixture()
def make_tag(catalog, category):
    def _make(name: str, category_id: int | None = None):
        return catalog.tags.create(TagCreate(name=name, category_id=category_id or category.id))
    return _make


@pytest.fixture()
def make_media(catalog, base_path):
    def _make(relative_path: str, **kw):
        data = {"size": 12.5, "media_type": MediaType.image}
        data.update(kw)
        return catalog.media.create(
            MediaCreate(relative_path=relative_path, base_path_id=base_path.id, **data)
        )
    return _make
