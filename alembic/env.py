"""Alembic migration environment (async SQLAlchemy).

The database URL comes from rolegate Settings, never from alembic.ini.

Seeding:
    After an online ``alembic upgrade`` the RBAC seeders in ``seeds/`` run
    (permissions, system roles, bootstrap admin). They are idempotent.
    Pass ``-x seed=false`` to skip them, or ``-x seed=true`` to force them
    for other online commands.
"""

import asyncio
import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, async_engine_from_config, async_sessionmaker

from alembic import context
from rolegate.core.config import settings
from rolegate.infrastructure.persistence.models import BaseModel

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

config.set_main_option("sqlalchemy.url", settings.database_url)

# Every model module is imported by the models package
target_metadata = BaseModel.metadata

TRUTHY = {"1", "true", "yes", "y"}
FALSY = {"0", "false", "no", "n"}


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite cannot ALTER most constraints in place
        render_as_batch=settings.database_url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit migration SQL to stdout without connecting."""
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection=connection)

    with context.begin_transaction():
        context.run_migrations()


def seeding_requested() -> bool:
    """Decide whether seeders run after this invocation."""
    try:
        flag = context.get_x_argument(as_dictionary=True).get("seed", "")
    except TypeError:
        flag = ""
    flag = flag.strip().lower()
    if flag in TRUTHY:
        return True
    if flag in FALSY:
        return False

    cmd_opts = getattr(config, "cmd_opts", None)
    return getattr(cmd_opts, "cmd", None) == "upgrade" or "upgrade" in sys.argv


async def run_seeders(engine: AsyncEngine) -> None:
    """Run the idempotent seeders in their own session."""
    # seeds/ lives next to this file and is not part of the rolegate package
    seeds_parent = str(Path(__file__).resolve().parent)
    if seeds_parent not in sys.path:
        sys.path.insert(0, seeds_parent)

    from seeds import run_all_seeders

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        await run_all_seeders(session)
        await session.commit()


async def run_async_migrations() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    try:
        async with engine.connect() as connection:
            await connection.run_sync(do_run_migrations)

        if seeding_requested():
            await run_seeders(engine)
    finally:
        await engine.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
