# tests/conftest.py
from __future__ import annotations
import os

import pytest
from sqlalchemy.engine import Engine

from mediacat.database.core.main import Base, create_db_engine, init_db

# MEDIACAT_TEST_POSTGRES=1 runs the suite against a throwaway PostgreSQL
USE_POSTGRES = os.getenv("MEDIACAT_TEST_POSTGRES", "").strip().lower() in {"1", "true", "yes"}


@pytest.fixture(scope="session")
def _postgres_container():
    if not USE_POSTGRES:
        yield None
        return
    from testcontainers.postgres import PostgresContainer

    with PostgresContainer("postgres:15-alpine") as pg:
        # Force psycopg driver in the URL returned by testcontainers (it defaults to psycopg2)
        yield pg.get_connection_url().replace("psycopg2", "psycopg")


@pytest.fixture()
def db_url(_postgres_container, tmp_path) -> str:
    return _postgres_container or f"sqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture()
def db_engine(db_url) -> Engine:
    engine = create_db_engine(db_url)
    # Skip Alembic here; just create tables from models
    init_db(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
