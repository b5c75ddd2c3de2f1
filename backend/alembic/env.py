"""Alembic environment — async migration runner for DevConnector.

Invariants:
    - The URL comes from Settings (DATABASE_URL, already rewritten for asyncpg),
      so migrations and the app always target the same database
    - devconnector.models is imported so users, profiles and posts are on Base.metadata
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

import devconnector.models  # noqa: F401
from devconnector.config import get_settings
from devconnector.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)
config.set_main_option(
    "sqlalchemy.url", get_settings().database_url.replace("%", "%%"),
)


def _configure(**kwargs) -> None:
    context.configure(target_metadata=Base.metadata, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(lambda conn: _configure(connection=conn))
    await engine.dispose()


if context.is_offline_mode():
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online())
