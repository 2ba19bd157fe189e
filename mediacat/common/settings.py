# mediacat/common/settings.py
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "y", "on"}


class DBConfig(BaseModel):
    """
    Where the catalog lives. By default a SQLite file at
    `<directory>/<file_name>`; an explicit `url` (any SQLAlchemy URL,
    e.g. postgresql+psycopg://...) replaces that.
    """
    directory: Path = Path("~/.local/share/mediacat")
    file_name: str = "main.db"
    echo: bool = False
    pool_pre_ping: bool = True

    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url", "url"),
    )

    @field_validator("echo", "pool_pre_ping", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        """Raises ConfigError when the SQLite location is unusable."""
        if self.url:
            return self.url
        from mediacat.database.core.main import build_database_url

        return build_database_url(self.directory, self.file_name)


class Settings(BaseSettings):
    app_name: str = "mediacat"
    app_env: str = "development"  # development|test|production
    log_level: str = "INFO"

    db: DBConfig = DBConfig()

    model_config = SettingsConfigDict(
        env_prefix="MEDIACAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_level(cls, v):
        level = str(v or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.db.effective_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Process-wide settings, read once from MEDIACAT_* variables and `.env`.
    Call `get_settings.cache_clear()` after changing the environment.

    Outside production a missing SQLite directory is created on first use.
    """
    s = Settings()
    directory = s.db.directory.expanduser()
    if s.app_env in ("development", "test") and not s.db.url and not directory.exists():
        directory.mkdir(parents=True)
    return s
