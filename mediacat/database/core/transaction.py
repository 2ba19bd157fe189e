# mediacat/database/core/transaction.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from mediacat.common.logging import get_logger
from mediacat.domain.errors import CatalogError, ErrorKind

logger = get_logger(__name__)


@contextmanager
def transactional(db: Session):
    with db.begin():
        yield db


@contextmanager
def session_scope(sessions: sessionmaker, db: Optional[Session] = None) -> Iterator[Session]:
    """
    Unit of work for one registry call.

    With `db` given, the call joins the caller's session and transaction
    (cross-registry checks run inside the write they guard). Otherwise a
    short-lived session is opened and committed on success, rolled back on
    error, and closed either way.
    """
    if db is not None:
        yield db
        return
    with sessions() as session, transactional(session):
        yield session


@contextmanager
def storage_errors(
    error_cls: Type[CatalogError],
    *,
    conflict: Optional[ErrorKind] = None,
    recheck: Optional[Callable[[], bool]] = None,
    in_use: bool = False,
) -> Iterator[None]:
    """
    Translate SQLAlchemy failures into `error_cls`.

    - IntegrityError on a write guarded by a unique constraint: `recheck`
      runs in a fresh session. It raises the referential error itself when
      a referenced row has gone, and returns True when the duplicate row
      exists (-> `conflict` kind). Anything else -> STORAGE.
    - IntegrityError with `in_use` set (foreign keys on delete) -> IN_USE
    - any other SQLAlchemyError -> STORAGE
    Catalog errors raised inside the block pass through untouched.
    """
    if conflict is not None and recheck is None:
        raise ValueError("a conflict kind needs a recheck")
    try:
        yield
    except IntegrityError as exc:
        if conflict is not None:
            logger.warning("constraint rejected write: %s", exc.orig)
            try:
                duplicate = recheck()
            except SQLAlchemyError as again:
                logger.error("storage error while rechecking: %s", again)
                raise error_cls(ErrorKind.STORAGE, str(again)) from again
            if duplicate:
                raise error_cls(conflict) from exc
        elif in_use:
            logger.warning("constraint rejected delete: %s", exc.orig)
            raise error_cls(ErrorKind.IN_USE) from exc
        logger.error("integrity error: %s", exc)
        raise error_cls(ErrorKind.STORAGE, str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        logger.error("storage error: %s", exc)
        raise error_cls(ErrorKind.STORAGE, str(exc)) from exc
