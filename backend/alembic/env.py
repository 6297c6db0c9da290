"""Alembic environment — migrations for the Fundboard schema.

Invariants:
    - The database URL resolves exactly like the app's: fundboard.config
      Settings (DATABASE_URL, .env, postgresql:// normalization), unless
      overridden with `alembic -x db_url=...`
    - Importing fundboard.models registers every table before autogenerate

Design Decisions:
    - Online runs use an async engine (asyncpg / aiosqlite), NullPool
    - SQLite gets batch mode so ALTERs in later revisions still apply locally
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

import fundboard.models  # noqa: F401
from fundboard.config import Settings
from fundboard.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def database_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("db_url")
    if override:
        return Settings(database_url=override).database_url
    return Settings().database_url


def _configure(database: str, **kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=database.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    url = database_url()
    _configure(
        url,
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection: Connection, url: str) -> None:
    _configure(url, connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    url = database_url()
    engine = create_async_engine(url, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync, url)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
