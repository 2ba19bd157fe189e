# mediacat/database/core/migrations.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

from mediacat.common.logging import get_logger
from mediacat.common.settings import get_settings

logger = get_logger(__name__)

ALEMBIC_DIR = Path(__file__).resolve().parent.parent / "alembic"


def alembic_config(url: Optional[str] = None) -> Config:
    """Alembic Config pointing at the packaged migration scripts (no alembic.ini needed)."""
    cfg = Config()
    cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    # ConfigParser interpolation: a literal % must be doubled
    cfg.set_main_option("sqlalchemy.url", (url or get_settings().database_url).replace("%", "%%"))
    return cfg


def upgrade_to_head(url: Optional[str] = None) -> None:
    logger.info("upgrading database schema to head")
    command.upgrade(alembic_config(url), "head")
