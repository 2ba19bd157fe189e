# mediacat/database/core/main.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from sqlalchemy import MetaData, create_engine, event, Column, Table
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from mediacat.common.logging import get_logger
from mediacat.common.settings import DBConfig, Settings, get_settings
from mediacat.domain.errors import ConfigError, ErrorKind

logger = get_logger(__name__)

MAIN_DATABASE_FILE_NAME = "main.db"

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

_serviceobject_first = ("id",)


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @classmethod
    def __table_cls__(cls, *args, **kw):
        """Reorder columns so ServiceObject fields come first."""
        if not args:
            return super().__table_cls__(*args, **kw)

        # Positional args are (name, metadata, *columns_and_constraints)
        name, metadata, *rest = args

        cols: List[Column] = [x for x in rest if isinstance(x, Column)]
        others = [x for x in rest if not isinstance(x, Column)]

        # Stable ordering: ServiceObject fields first, then everything else in their original order
        priority = {n: i for i, n in enumerate(_serviceobject_first)}
        original_index = {c: i for i, c in enumerate(cols)}

        cols.sort(key=lambda c: (priority.get(c.name, 10_000), original_index[c]))

        return Table(name, metadata, *(cols + others), **kw)


def build_database_url(directory: str | Path, file_name: Optional[str] = None) -> str:
    """
    SQLite URL for `<directory>/<file_name>` (file name defaults to main.db).

    Raises ConfigError when the directory is empty or not a directory, or
    when an explicit file name is empty.
    """
    if not str(directory).strip():
        raise ConfigError(ErrorKind.INVALID_PATH, "database directory must not be empty")

    database_dir = Path(directory).expanduser()
    if not database_dir.is_dir():
        raise ConfigError(ErrorKind.NOT_A_DIRECTORY, f"{database_dir} is not a directory")

    if file_name is None:
        file_name = MAIN_DATABASE_FILE_NAME
    elif not file_name.strip():
        raise ConfigError(ErrorKind.INVALID_NAME, "database file name must not be empty")

    return f"sqlite:///{database_dir / file_name}"


def _enable_sqlite_foreign_keys(dbapi_conn, _):
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON")
    finally:
        cur.close()


def create_db_engine(url: Optional[str] = None, *, settings: Optional[Settings] = None, **engine_kw) -> Engine:
    """
    Build an Engine for `url` (defaults to the configured database URL).
    Settings are only loaded when neither `url` nor `settings` is given;
    otherwise echo/pool_pre_ping come from `settings` or DBConfig defaults.
    SQLite connections get foreign key enforcement switched on.
    """
    if not url and settings is None:
        settings = get_settings()
    db_cfg = settings.db if settings is not None else DBConfig()
    url = url or settings.database_url
    engine = create_engine(
        url,
        echo=db_cfg.echo,
        pool_pre_ping=db_cfg.pool_pre_ping,
        future=True,
        **engine_kw,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    logger.debug("engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False, future=True, autoflush=False)


def init_db(engine: Engine) -> None:
    """Create all catalog tables that do not exist yet (no migrations)."""
    # models must be imported so their tables are registered on Base.metadata
    import mediacat.database.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
