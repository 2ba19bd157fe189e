# tests/services/test_tag_registry.py
from __future__ import annotations

import pytest

from mediacat.domain.errors import CategoryError, ErrorKind, TagError
from mediacat.services.schemas import CategoryCreate, TagCreate, TagUpdate


def test_create_and_get(catalog, category):
    t = catalog.tags.create(TagCreate(name=" Paris ", category_id=category.id, description="city"))
    assert t.name == "Paris"
    assert t.category_id == category.id
    assert catalog.tags.get(t.id) == t
    assert t.as_dict() == {"id": t.id, "name": "Paris", "category_id": category.id, "description": "city"}


def test_category_must_exist(catalog):
    with pytest.raises(TagError) as exc:
        catalog.tags.create(TagCreate(name="Paris", category_id=0))
    assert exc.value.kind is ErrorKind.INVALID_CATEGORY_ID

    with pytest.raises(TagError) as exc:
        catalog.tags.create(TagCreate(name="Paris", category_id=31))
    assert exc.value.kind is ErrorKind.CATEGORY_NOT_FOUND
    assert isinstance(exc.value.__cause__, CategoryError)
    assert exc.value.__cause__.kind is ErrorKind.NOT_FOUND


def test_category_checked_before_name(catalog):
    with pytest.raises(TagError) as exc:
        catalog.tags.create(TagCreate(name="", category_id=31))
    assert exc.value.kind is ErrorKind.CATEGORY_NOT_FOUND


@pytest.mark.parametrize(
    "name, description, kind",
    [
        ("  ", "", ErrorKind.INVALID_NAME),
        ("t" * 51, "", ErrorKind.NAME_TOO_LONG),
        ("ok", "d" * 301, ErrorKind.DESCRIPTION_TOO_LONG),
    ],
)
def test_create_validation(catalog, category, name, description, kind):
    with pytest.raises(TagError) as exc:
        catalog.tags.create(TagCreate(name=name, category_id=category.id, description=description))
    assert exc.value.kind is kind


def test_name_unique_per_category(catalog, category, make_tag):
    make_tag("Paris")
    with pytest.raises(TagError) as exc:
        make_tag("Paris")
    assert exc.value.kind is ErrorKind.ALREADY_EXISTS

    other = catalog.categories.create(CategoryCreate(name="Hotels", color="#333333"))
    make_tag("Paris", other.id)
    make_tag("paris")
    assert len(catalog.tags.list()) == 3


def test_unique_constraint_backs_up_the_check(catalog, make_tag, monkeypatch):
    make_tag("Rome")
    monkeypatch.setattr(catalog.tags, "_ensure_unique", lambda *a, **kw: None)
    with pytest.raises(TagError) as exc:
        make_tag("Rome")
    assert exc.value.kind is ErrorKind.ALREADY_EXISTS
    assert [t.name for t in catalog.tags.list()] == ["Rome"]


def test_foreign_key_failure_is_not_reported_as_a_duplicate(catalog, monkeypatch):
    # category vanishes between the check and the insert
    monkeypatch.setattr(catalog.tags, "_require_category", lambda *a, **kw: None)
    with pytest.raises(TagError) as exc:
        catalog.tags.create(TagCreate(name="Rome", category_id=777))
    assert exc.value.kind is ErrorKind.CATEGORY_NOT_FOUND
    assert catalog.tags.list() == []


def test_update_without_fields_changes_nothing(catalog, make_tag):
    t = make_tag("Paris")
    catalog.tags.update(t.id, TagUpdate())
    catalog.tags.update(t.id)
    assert catalog.tags.get(t.id) == t


def test_update_description_only(catalog, make_tag):
    t = make_tag("Paris")
    catalog.tags.update(t.id, TagUpdate(description="capital"))
    got = catalog.tags.get(t.id)
    assert (got.name, got.category_id, got.description) == ("Paris", t.category_id, "capital")


def test_update_rename_conflict(catalog, make_tag):
    make_tag("Paris")
    t = make_tag("Lyon")
    with pytest.raises(TagError) as exc:
        catalog.tags.update(t.id, TagUpdate(name="Paris"))
    assert exc.value.kind is ErrorKind.ALREADY_EXISTS
    assert catalog.tags.get(t.id).name == "Lyon"


def test_update_move_to_missing_category(catalog, make_tag):
    t = make_tag("Paris")
    with pytest.raises(TagError) as exc:
        catalog.tags.update(t.id, TagUpdate(category_id=404))
    assert exc.value.kind is ErrorKind.CATEGORY_NOT_FOUND

    with pytest.raises(TagError) as exc:
        catalog.tags.update(404, TagUpdate(name="x"))
    assert exc.value.kind is ErrorKind.NOT_FOUND


def test_list_by_category_sorted_by_name(catalog, category, make_tag):
    other = catalog.categories.create(CategoryCreate(name="Moods", color="#444444"))
    make_tag("Zurich")
    make_tag("Amsterdam")
    make_tag("calm", other.id)

    assert [t.name for t in catalog.tags.list(category.id)] == ["Amsterdam", "Zurich"]
    assert [t.name for t in catalog.tags.list(other.id)] == ["calm"]
    with pytest.raises(TagError) as exc:
        catalog.tags.list(404)
    assert exc.value.kind is ErrorKind.CATEGORY_NOT_FOUND


def test_search_by_name(catalog, make_tag):
    make_tag("Paris")
    make_tag("Parma")
    make_tag("Lyon")

    assert [t.name for t in catalog.tags.search_by_name("PAR")] == ["Paris", "Parma"]
    assert [t.name for t in catalog.tags.search_by_name("pari")] == ["Paris"]
    with pytest.raises(TagError) as exc:
        catalog.tags.search_by_name("pa")
    assert exc.value.kind is ErrorKind.INVALID_NAME


def test_delete_guarded_by_media(catalog, make_tag, make_media):
    t = make_tag("Paris")
    m = make_media("paris.jpg")
    catalog.media.tag_media(m.id, t.id)

    with pytest.raises(TagError) as exc:
        catalog.tags.delete(t.id)
    assert exc.value.kind is ErrorKind.IN_USE

    catalog.media.untag_media(m.id, t.id)
    catalog.tags.delete(t.id)
    with pytest.raises(TagError) as exc:
        catalog.tags.get(t.id)
    assert exc.value.kind is ErrorKind.NOT_FOUND
