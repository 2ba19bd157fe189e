# mediacat/services/registries/tags.py
from __future__ import annotations

from functools import partial
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, sessionmaker

from mediacat.common.logging import get_logger
from mediacat.database.core.transaction import session_scope, storage_errors
from mediacat.database.repos._mapping import to_domain_tag
from mediacat.database.repos.category_repo import CategoryRepo
from mediacat.database.repos.tag_repo import TagRepo
from mediacat.domain.entities.tag import Tag
from mediacat.domain.errors import CategoryError, ErrorKind, TagError
from mediacat.domain.policies.text_limits import (
    check_description,
    check_name,
    check_search_prefix,
    starts_with_ci,
)
from mediacat.domain.ports.registries import CategoryLookup
from mediacat.services.schemas.tags import TagCreate, TagUpdate

logger = get_logger(__name__)


class TagRegistry:
    """
    Tags scoped to a category. (name, category_id) is unique; names are
    compared exactly as stored.
    """

    def __init__(self, sessions: sessionmaker, categories: CategoryLookup) -> None:
        self._sessions = sessions
        self._categories = categories

    # ---------- helpers ----------

    def _require_category(self, category_id: int, db: Session) -> None:
        if category_id <= 0:
            raise TagError(ErrorKind.INVALID_CATEGORY_ID, f"invalid category id {category_id}")
        try:
            self._categories.get(category_id, db=db)
        except CategoryError as err:
            if err.kind == ErrorKind.NOT_FOUND:
                raise TagError(ErrorKind.CATEGORY_NOT_FOUND, f"category {category_id} not found") from err
            raise TagError(ErrorKind.CATEGORY_ERROR, f"category error: {err.message}") from err

    def _clean_and_validate(
        self, name: str, category_id: int, description: str, db: Session
    ) -> Tuple[str, str]:
        name = (name or "").strip()
        description = (description or "").strip()
        self._require_category(category_id, db)
        check_name(name, TagError)
        check_description(description, TagError)
        return name, description

    def _ensure_unique(self, repo: TagRepo, name: str, category_id: int, *, exclude_id: Optional[int] = None) -> None:
        if repo.find(name, category_id, exclude_id=exclude_id) is not None:
            logger.warning("tag %r already exists in category %s", name, category_id)
            raise TagError(ErrorKind.ALREADY_EXISTS, f"tag {name!r} already exists in category {category_id}")

    def _exists_after_conflict(self, name: str, category_id: int, exclude_id: Optional[int] = None) -> bool:
        with session_scope(self._sessions) as s:
            if CategoryRepo(s).get(category_id) is None:
                raise TagError(ErrorKind.CATEGORY_NOT_FOUND, f"category {category_id} not found")
            return TagRepo(s).find(name, category_id, exclude_id=exclude_id) is not None

    # ---------- operations ----------

    def create(self, payload: TagCreate) -> Tag:
        recheck = partial(self._exists_after_conflict, (payload.name or "").strip(), payload.category_id)
        with storage_errors(TagError, conflict=ErrorKind.ALREADY_EXISTS, recheck=recheck), \
                session_scope(self._sessions) as s:
            name, description = self._clean_and_validate(
                payload.name, payload.category_id, payload.description, s
            )
            repo = TagRepo(s)
            self._ensure_unique(repo, name, payload.category_id)
            row = repo.create_tag(name=name, category_id=payload.category_id, description=description)
            s.flush()
            created = to_domain_tag(row)
        logger.info("created tag %r in category %s (id=%s)", created.name, created.category_id, created.id)
        return created

    def get(self, tag_id: int, *, db: Optional[Session] = None) -> Tag:
        if tag_id <= 0:
            raise TagError(ErrorKind.INVALID_ID, f"invalid tag id {tag_id}")
        with storage_errors(TagError), session_scope(self._sessions, db) as s:
            row = TagRepo(s).get(tag_id)
            if row is None:
                raise TagError(ErrorKind.NOT_FOUND, f"tag {tag_id} not found")
            return to_domain_tag(row)

    def update(self, tag_id: int, payload: Optional[TagUpdate] = None) -> None:
        """
        Patch a tag: None fields keep the stored value, then the merged
        record is validated and checked for uniqueness (ignoring itself).
        """
        patch = payload or TagUpdate()

        def recheck() -> bool:
            # name and category_id are the merged values assigned below
            return self._exists_after_conflict(name, category_id, exclude_id=tag_id)

        with storage_errors(TagError, conflict=ErrorKind.ALREADY_EXISTS, recheck=recheck), \
                session_scope(self._sessions) as s:
            current = self.get(tag_id, db=s)
            category_id = patch.category_id if patch.category_id is not None else current.category_id
            name, description = self._clean_and_validate(
                patch.name if patch.name is not None else current.name,
                category_id,
                patch.description if patch.description is not None else current.description,
                s,
            )
            repo = TagRepo(s)
            self._ensure_unique(repo, name, category_id, exclude_id=tag_id)
            row = repo.get(tag_id)
            row.name = name
            row.category_id = category_id
            row.description = description
            s.flush()
        logger.info("updated tag %s", tag_id)

    def list(self, category_id: Optional[int] = None) -> List[Tag]:
        """All tags by name, or only those of `category_id` (which must exist)."""
        with storage_errors(TagError), session_scope(self._sessions) as s:
            if category_id is not None:
                self._require_category(category_id, s)
            return [to_domain_tag(r) for r in TagRepo(s).list_tags(category_id)]

    def search_by_name(self, prefix: str) -> List[Tag]:
        prefix = check_search_prefix(prefix, TagError, ErrorKind.INVALID_NAME)
        return [t for t in self.list() if starts_with_ci(t.name, prefix)]

    def delete(self, tag_id: int) -> None:
        """Delete a tag; refused with IN_USE while media files carry it."""
        with storage_errors(TagError, in_use=True), session_scope(self._sessions) as s:
            self.get(tag_id, db=s)
            repo = TagRepo(s)
            n = repo.count_links_for_tag(tag_id)
            if n:
                logger.warning("tag %s is still used by %d media file(s)", tag_id, n)
                raise TagError(ErrorKind.IN_USE, f"tag {tag_id} is used by {n} media file(s)")
            repo.delete_tag(repo.get(tag_id))
            s.flush()
        logger.info("deleted tag %s", tag_id)
