# mediacat/services/registries/base_paths.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, sessionmaker

from mediacat.common.logging import get_logger
from mediacat.common.path.safe import normalize_base_path, overlaps
from mediacat.database.core.transaction import session_scope, storage_errors
from mediacat.database.repos._mapping import to_domain_base_path
from mediacat.database.repos.base_path_repo import BasePathRepo
from mediacat.domain.entities.base_path import BasePath
from mediacat.domain.errors import BasePathError, ErrorKind
from mediacat.domain.policies.text_limits import check_description

logger = get_logger(__name__)


def _check_overlap(new_path: str, existing: Iterable[str]) -> None:
    """
    Reject a root that is already registered, or that has a registered
    root as a string prefix (or is one of theirs).
    """
    paths = list(existing)
    if new_path in paths:
        raise BasePathError(ErrorKind.ALREADY_EXISTS, f"{new_path} is already registered")
    for other in paths:
        if overlaps(new_path, other):
            raise BasePathError(ErrorKind.IS_SUB_PATH, f"{new_path} overlaps registered path {other}")


class BasePathRegistry:
    """
    Registered filesystem roots.

    No two roots may overlap: a path can be registered only if it is not
    equal to, inside, or above an already registered one. A root can be
    deleted only once no media file references it.
    """

    def __init__(self, sessions: sessionmaker) -> None:
        self._sessions = sessions

    def create(self, path: str, description: str = "") -> BasePath:
        norm = normalize_base_path(path)
        description = (description or "").strip()

        if not norm:
            raise BasePathError(ErrorKind.INVALID_PATH, "path must not be empty")
        check_description(description, BasePathError)

        fs_path = Path(norm)
        if not fs_path.exists():
            raise BasePathError(ErrorKind.NOT_EXISTS, f"{norm} does not exist")
        if not fs_path.is_dir():
            raise BasePathError(ErrorKind.NOT_A_DIRECTORY, f"{norm} is not a directory")
        if not fs_path.is_absolute():
            raise BasePathError(ErrorKind.NOT_ABSOLUTE, f"{norm} is not an absolute path")

        def registered() -> bool:
            with session_scope(self._sessions) as fresh:
                return BasePathRepo(fresh).get_by_path(norm) is not None

        try:
            with storage_errors(BasePathError, conflict=ErrorKind.ALREADY_EXISTS, recheck=registered), \
                    session_scope(self._sessions) as db:
                repo = BasePathRepo(db)
                _check_overlap(norm, repo.all_paths())
                row = repo.create(path=norm, description=description)
                db.flush()
                created = to_domain_base_path(row)
        except BasePathError as err:
            if err.kind in (ErrorKind.ALREADY_EXISTS, ErrorKind.IS_SUB_PATH):
                logger.warning("base path %s rejected: %s", norm, err.message)
            raise

        logger.info("registered base path %s (id=%s)", created.path, created.id)
        return created

    def get(self, base_path_id: int, *, db: Optional[Session] = None) -> BasePath:
        if base_path_id <= 0:
            raise BasePathError(ErrorKind.INVALID_ID, f"invalid base path id {base_path_id}")
        with storage_errors(BasePathError), session_scope(self._sessions, db) as s:
            row = BasePathRepo(s).get(base_path_id)
            if row is None:
                raise BasePathError(ErrorKind.NOT_FOUND, f"base path {base_path_id} not found")
            return to_domain_base_path(row)

    def get_by_path(self, path: str) -> BasePath:
        norm = normalize_base_path(path)
        if not norm:
            raise BasePathError(ErrorKind.INVALID_PATH, "path must not be empty")
        with storage_errors(BasePathError), session_scope(self._sessions) as s:
            row = BasePathRepo(s).get_by_path(norm)
            if row is None:
                raise BasePathError(ErrorKind.NOT_FOUND, f"base path {norm} not found")
            return to_domain_base_path(row)

    def list(self, ids: Optional[Iterable[int]] = None) -> List[BasePath]:
        """All base paths by id; a non-empty `ids` keeps only those present."""
        with storage_errors(BasePathError), session_scope(self._sessions) as s:
            return [to_domain_base_path(r) for r in BasePathRepo(s).list(ids)]

    def update_description(self, base_path_id: int, description: str) -> None:
        if base_path_id <= 0:
            raise BasePathError(ErrorKind.INVALID_ID, f"invalid base path id {base_path_id}")
        description = (description or "").strip()
        check_description(description, BasePathError)

        with storage_errors(BasePathError), session_scope(self._sessions) as s:
            row = BasePathRepo(s).get(base_path_id)
            if row is None:
                raise BasePathError(ErrorKind.NOT_FOUND, f"base path {base_path_id} not found")
            row.description = description
        logger.info("updated description of base path %s", base_path_id)

    def delete(self, base_path_id: int) -> None:
        if base_path_id <= 0:
            raise BasePathError(ErrorKind.INVALID_ID, f"invalid base path id {base_path_id}")

        with storage_errors(BasePathError, in_use=True), session_scope(self._sessions) as s:
            repo = BasePathRepo(s)
            row = repo.get(base_path_id)
            if row is None:
                raise BasePathError(ErrorKind.NOT_FOUND, f"base path {base_path_id} not found")
            n = repo.count_media(base_path_id)
            if n:
                logger.warning("base path %s still has %d media file(s)", base_path_id, n)
                raise BasePathError(ErrorKind.IN_USE, f"base path {base_path_id} has {n} media file(s)")
            repo.delete(row)
            s.flush()
        logger.info("deleted base path %s", base_path_id)
