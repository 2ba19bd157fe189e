# tests/services/test_base_path_registry.py
from __future__ import annotations

import pytest

from mediacat.domain.errors import BasePathError, ErrorKind


def _kind(exc_info) -> ErrorKind:
    return exc_info.value.kind


def test_create_normalizes_and_gets(catalog, media_root):
    bp = catalog.base_paths.create(f"  {media_root}//  ", "  photos  ")
    assert bp.path == str(media_root)
    assert bp.description == "photos"
    assert catalog.base_paths.get(bp.id) == bp
    assert catalog.base_paths.get_by_path(f"{media_root}/") == bp


@pytest.mark.parametrize("raw", ["", "   "])
def test_empty_path_rejected(catalog, raw):
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.create(raw)
    assert _kind(exc) is ErrorKind.INVALID_PATH


def test_description_checked_before_filesystem(catalog):
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.create("/no/such/dir", "x" * 301)
    assert _kind(exc) is ErrorKind.DESCRIPTION_TOO_LONG


def test_filesystem_checks(catalog, tmp_path, monkeypatch):
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.create(str(tmp_path / "missing"))
    assert _kind(exc) is ErrorKind.NOT_EXISTS

    f = tmp_path / "file.txt"
    f.write_text("hi")
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.create(str(f))
    assert _kind(exc) is ErrorKind.NOT_A_DIRECTORY

    (tmp_path / "rel").mkdir()
    monkeypatch.chdir(tmp_path)
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.create("rel")
    assert _kind(exc) is ErrorKind.NOT_ABSOLUTE

    assert catalog.base_paths.list() == []


def test_duplicate_rejected(catalog, media_root):
    catalog.base_paths.create(str(media_root))
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.create(str(media_root) + "/")
    assert _kind(exc) is ErrorKind.ALREADY_EXISTS
    assert len(catalog.base_paths.list()) == 1


def test_containment_rejected_in_both_orders(catalog, tmp_path):
    outer = tmp_path / "a" / "b"
    inner = outer / "c"
    inner.mkdir(parents=True)

    catalog.base_paths.create(str(outer))
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.create(str(inner))
    assert _kind(exc) is ErrorKind.IS_SUB_PATH


def test_containment_rejected_when_parent_comes_second(catalog, tmp_path):
    outer = tmp_path / "a" / "b"
    inner = outer / "c"
    inner.mkdir(parents=True)

    catalog.base_paths.create(str(inner))
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.create(str(outer))
    assert _kind(exc) is ErrorKind.IS_SUB_PATH


def test_sibling_sharing_a_name_prefix_is_rejected(catalog, tmp_path):
    (tmp_path / "b").mkdir()
    (tmp_path / "bc").mkdir()
    catalog.base_paths.create(str(tmp_path / "b"))
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.create(str(tmp_path / "bc"))
    assert _kind(exc) is ErrorKind.IS_SUB_PATH
    assert [bp.path for bp in catalog.base_paths.list()] == [str(tmp_path / "b")]


def test_get_errors(catalog):
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.get(0)
    assert _kind(exc) is ErrorKind.INVALID_ID
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.get(42)
    assert _kind(exc) is ErrorKind.NOT_FOUND


def test_list_filters_by_ids(catalog, tmp_path):
    created = []
    for name in ("one", "two", "three"):
        (tmp_path / name).mkdir()
        created.append(catalog.base_paths.create(str(tmp_path / name)))

    assert catalog.base_paths.list() == created
    assert catalog.base_paths.list([]) == created
    assert catalog.base_paths.list({created[2].id, created[0].id, 999}) == [created[0], created[2]]


def test_update_description(catalog, base_path):
    catalog.base_paths.update_description(base_path.id, "  renamed ")
    assert catalog.base_paths.get(base_path.id).description == "renamed"

    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.update_description(base_path.id, "y" * 301)
    assert _kind(exc) is ErrorKind.DESCRIPTION_TOO_LONG
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.update_description(777, "x")
    assert _kind(exc) is ErrorKind.NOT_FOUND


def test_delete_guarded_by_media(catalog, base_path, make_media):
    m = make_media("a.jpg")
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.delete(base_path.id)
    assert _kind(exc) is ErrorKind.IN_USE

    catalog.media.delete(m.id)
    catalog.base_paths.delete(base_path.id)
    with pytest.raises(BasePathError) as exc:
        catalog.base_paths.get(base_path.id)
    assert _kind(exc) is ErrorKind.NOT_FOUND
