# tests/services/test_category_registry.py
from __future__ import annotations

import pytest

from mediacat.domain.errors import CategoryError, ErrorKind
from mediacat.services.schemas import CategoryCreate, CategoryUpdate, TagCreate


def test_create_trims_and_lowercases(catalog):
    c = catalog.categories.create(CategoryCreate(name="  Events ", color=" #FFAA00 ", description=" d "))
    assert (c.name, c.color, c.description) == ("Events", "#ffaa00", "d")
    assert catalog.categories.get(c.id) == c


@pytest.mark.parametrize(
    "name, color, description, kind",
    [
        ("   ", "#000000", "", ErrorKind.INVALID_NAME),
        ("n" * 51, "#000000", "", ErrorKind.NAME_TOO_LONG),
        ("ok", "#000000", "d" * 301, ErrorKind.DESCRIPTION_TOO_LONG),
        ("ok", "blue", "", ErrorKind.INVALID_COLOR),
        ("ok", "#12345", "", ErrorKind.INVALID_COLOR),
    ],
)
def test_create_validation(catalog, name, color, description, kind):
    with pytest.raises(CategoryError) as exc:
        catalog.categories.create(CategoryCreate(name=name, color=color, description=description))
    assert exc.value.kind is kind
    assert catalog.categories.list() == []


def test_name_limit_counts_graphemes(catalog):
    name = "e\u0301" * 50  # 100 code points, 50 graphemes
    c = catalog.categories.create(CategoryCreate(name=name, color="aabbccdd"))
    assert c.name == name


def test_update_is_a_patch(catalog, category):
    catalog.categories.update(category.id, CategoryUpdate(description="where it happened"))
    got = catalog.categories.get(category.id)
    assert got.name == category.name
    assert got.color == category.color
    assert got.description == "where it happened"

    catalog.categories.update(category.id, CategoryUpdate(name="Locations", color="#000000"))
    got = catalog.categories.get(category.id)
    assert (got.name, got.color, got.description) == ("Locations", "#000000", "where it happened")


def test_update_without_fields_changes_nothing(catalog, category):
    catalog.categories.update(category.id)
    catalog.categories.update(category.id, CategoryUpdate())
    assert catalog.categories.get(category.id) == category


def test_update_rejects_invalid_merge(catalog, category):
    with pytest.raises(CategoryError) as exc:
        catalog.categories.update(category.id, CategoryUpdate(color="nope"))
    assert exc.value.kind is ErrorKind.INVALID_COLOR
    assert catalog.categories.get(category.id) == category

    with pytest.raises(CategoryError) as exc:
        catalog.categories.update(999, CategoryUpdate(name="x"))
    assert exc.value.kind is ErrorKind.NOT_FOUND


def test_search_by_name(catalog):
    for name in ("Places", "people", "Pets"):
        catalog.categories.create(CategoryCreate(name=name, color="#111111"))

    assert [c.name for c in catalog.categories.search_by_name("pla")] == ["Places"]
    assert [c.name for c in catalog.categories.search_by_name(" PEO ")] == ["people"]
    assert catalog.categories.search_by_name("zzz") == []

    with pytest.raises(CategoryError) as exc:
        catalog.categories.search_by_name(" pe ")
    assert exc.value.kind is ErrorKind.SEARCH_TOO_SHORT


def test_list_by_ids(catalog, category):
    other = catalog.categories.create(CategoryCreate(name="Moods", color="#222222"))
    assert catalog.categories.list() == [category, other]
    assert catalog.categories.list([other.id]) == [other]


def test_delete_guarded_by_tags(catalog, category):
    tag = catalog.tags.create(TagCreate(name="Paris", category_id=category.id))
    with pytest.raises(CategoryError) as exc:
        catalog.categories.delete(category.id)
    assert exc.value.kind is ErrorKind.IN_USE

    catalog.tags.delete(tag.id)
    catalog.categories.delete(category.id)
    assert catalog.categories.list() == []

    with pytest.raises(CategoryError) as exc:
        catalog.categories.delete(category.id)
    assert exc.value.kind is ErrorKind.NOT_FOUND
