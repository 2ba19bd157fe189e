# mediacat/services/catalog.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from mediacat.common.logging import get_logger
from mediacat.common.settings import Settings, get_settings
from mediacat.database.core.main import create_db_engine, init_db, make_session_factory
from mediacat.services.registries.base_paths import BasePathRegistry
from mediacat.services.registries.categories import CategoryRegistry
from mediacat.services.registries.media import MediaCatalog
from mediacat.services.registries.tags import TagRegistry


@dataclass(frozen=True)
class Catalog:
    """
    The four registries wired over one session factory.

    Dependencies point one way only:
        TagRegistry  -> CategoryRegistry
        MediaCatalog -> BasePathRegistry, TagRegistry
    """
    base_paths: BasePathRegistry
    categories: CategoryRegistry
    tags: TagRegistry
    media: MediaCatalog

    @classmethod
    def from_session_factory(cls, sessions: sessionmaker) -> "Catalog":
        base_paths = BasePathRegistry(sessions)
        categories = CategoryRegistry(sessions)
        tags = TagRegistry(sessions, categories)
        media = MediaCatalog(sessions, base_paths, tags)
        return cls(base_paths=base_paths, categories=categories, tags=tags, media=media)

    @classmethod
    def from_engine(cls, engine: Engine, *, create_tables: bool = False) -> "Catalog":
        if create_tables:
            init_db(engine)
        return cls.from_session_factory(make_session_factory(engine))

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, *, create_tables: bool = False) -> "Catalog":
        """
        Catalog over the configured database. Applies `log_level` to the
        "mediacat" logger; a bad SQLite location raises ConfigError.
        """
        cfg = settings or get_settings()
        get_logger("mediacat", cfg.log_level)
        return cls.from_engine(create_db_engine(cfg.database_url, settings=cfg), create_tables=create_tables)
