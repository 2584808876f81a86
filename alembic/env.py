from __future__ import annotations

import os
import sys
from logging.config import fileConfig

from sqlalchemy import create_engine, pool

from alembic import context

# Running `alembic` from the repo root: make the flat modules (db, models) importable
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

from db import DATABASE_URL, Base  # noqa: E402
import models  # noqa: E402,F401  registers tables on Base.metadata

# this is the Alembic Config object, which provides access to values within the .ini file
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Safety check: autogenerate against an empty metadata would emit destructive diffs
_REQUIRED_TABLES = ("math_problem_sessions", "math_problem_submissions")
_missing = [t for t in _REQUIRED_TABLES if t not in target_metadata.tables]
if _missing:
    raise RuntimeError(
        f"Alembic autogenerate safety: {_missing} not present in Base.metadata. "
        "Ensure models.py is importable from the project root."
    )


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,  # detect column type changes
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    # db.DATABASE_URL is already normalized to the psycopg driver
    connectable = create_engine(DATABASE_URL, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
