# tests/database/conftest.py
from __future__ import annotations

from typing import Tuple

import pytest
from sqlalchemy.orm import Session

from mediacat.database.models import BasePath, TagCategory


@pytest.fixture()
def db(db_engine) -> Session:
    """
    Per-test SQLAlchemy Session bound to a transaction (rolled back after each test).
    Uses the engine provided by the top-level conftest, so SQLite runs with
    foreign keys enforced.
    """
    connection = db_engine.connect()
    trans = connection.begin()

    session = Session(bind=connection, future=True)
    try:
        yield session
    finally:
        session.close()
        if trans.is_active:
            trans.rollback()
        connection.close()


@pytest.fixture()
def seeded(db) -> Tuple[BasePath, TagCategory]:
    """One base path and one tag category, flushed so both have ids."""
    bp = BasePath(base_path="/srv/photos", description="")
    cat = TagCategory(name="People", color="#112233")
    db.add_all([bp, cat])
    db.flush()
    return bp, cat
