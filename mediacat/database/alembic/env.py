# mediacat/database/alembic/env.py
from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool

# --- Load app settings --------------------------------------------------------
# This import must work without importing the whole app graph (keep it light).
from mediacat.common.settings import get_settings
from mediacat.database.core.main import Base, create_db_engine
import mediacat.database.models  # noqa: F401  (registers tables on Base.metadata)

# --- Alembic Config -----------------------------------------------------------
alembic_config = context.config

# If alembic.ini has a loggers section, set it up.
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

# Precedence: explicit sqlalchemy.url on the Config, then DATABASE_URL, then Settings.
database_url = (
    alembic_config.get_main_option("sqlalchemy.url")
    or os.getenv("DATABASE_URL")
    or get_settings().database_url
)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (no DB connection)."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=database_url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (with an Engine/Connection)."""
    connectable = create_db_engine(database_url, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
            # SQLite cannot ALTER most constraints in place
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


# Entrypoint selected by Alembic
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
