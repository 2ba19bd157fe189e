# mediacat/services/registries/categories.py
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session, sessionmaker

from mediacat.common.logging import get_logger
from mediacat.common.strings.colors import normalize_hex_color
from mediacat.database.core.transaction import session_scope, storage_errors
from mediacat.database.repos._mapping import to_domain_category
from mediacat.database.repos.category_repo import CategoryRepo
from mediacat.domain.entities.tag import Category
from mediacat.domain.errors import CategoryError, ErrorKind
from mediacat.domain.policies.text_limits import (
    check_description,
    check_name,
    check_search_prefix,
    starts_with_ci,
)
from mediacat.services.schemas.tags import CategoryCreate, CategoryUpdate

logger = get_logger(__name__)


def _clean_and_validate(name: str, color: str, description: str) -> Tuple[str, str, str]:
    """Trim/lowercase the fields, then check them in order name -> description -> color."""
    name = (name or "").strip()
    description = (description or "").strip()

    check_name(name, CategoryError)
    check_description(description, CategoryError)

    clean_color = normalize_hex_color(color)
    if clean_color is None:
        raise CategoryError(ErrorKind.INVALID_COLOR, f"{color!r} is not a hex colour")
    return name, clean_color, description


class CategoryRegistry:
    def __init__(self, sessions: sessionmaker) -> None:
        self._sessions = sessions

    def create(self, payload: CategoryCreate) -> Category:
        name, color, description = _clean_and_validate(payload.name, payload.color, payload.description)
        with storage_errors(CategoryError), session_scope(self._sessions) as s:
            row = CategoryRepo(s).create(name=name, color=color, description=description)
            s.flush()
            created = to_domain_category(row)
        logger.info("created category %r (id=%s)", created.name, created.id)
        return created

    def get(self, category_id: int, *, db: Optional[Session] = None) -> Category:
        if category_id <= 0:
            raise CategoryError(ErrorKind.INVALID_ID, f"invalid category id {category_id}")
        with storage_errors(CategoryError), session_scope(self._sessions, db) as s:
            row = CategoryRepo(s).get(category_id)
            if row is None:
                raise CategoryError(ErrorKind.NOT_FOUND, f"category {category_id} not found")
            return to_domain_category(row)

    def list(self, ids: Optional[Iterable[int]] = None) -> List[Category]:
        with storage_errors(CategoryError), session_scope(self._sessions) as s:
            return [to_domain_category(r) for r in CategoryRepo(s).list(ids)]

    def search_by_name(self, prefix: str) -> List[Category]:
        """
        Categories whose name starts with `prefix` (case-insensitive).
        The prefix needs at least 3 characters.
        """
        prefix = check_search_prefix(prefix, CategoryError, ErrorKind.SEARCH_TOO_SHORT)
        return [c for c in self.list() if starts_with_ci(c.name, prefix)]

    def update(self, category_id: int, payload: Optional[CategoryUpdate] = None) -> None:
        """
        Patch a category. Fields left as None keep their stored value; the
        merged record is validated as a whole.
        """
        patch = payload or CategoryUpdate()
        with storage_errors(CategoryError), session_scope(self._sessions) as s:
            current = self.get(category_id, db=s)
            name, color, description = _clean_and_validate(
                patch.name if patch.name is not None else current.name,
                patch.color if patch.color is not None else current.color,
                patch.description if patch.description is not None else current.description,
            )
            row = CategoryRepo(s).get(category_id)
            row.name = name
            row.color = color
            row.description = description
        logger.info("updated category %s", category_id)

    def delete(self, category_id: int) -> None:
        """Delete a category; refused with IN_USE while tags still belong to it."""
        with storage_errors(CategoryError, in_use=True), session_scope(self._sessions) as s:
            self.get(category_id, db=s)
            repo = CategoryRepo(s)
            n = repo.count_tags(category_id)
            if n:
                logger.warning("category %s still has %d tag(s)", category_id, n)
                raise CategoryError(ErrorKind.IN_USE, f"category {category_id} has {n} tag(s)")
            repo.delete(repo.get(category_id))
            s.flush()
        logger.info("deleted category %s", category_id)
