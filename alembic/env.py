"""
Alembic environment. Migrations run synchronously, so the app's async
DATABASE_URL is rewritten to the matching sync driver.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from portfolio_api.config import get_settings
from portfolio_api.db.base import Base
from portfolio_api.db.models import BlogPost, Project, User  # noqa: F401 - register tables on Base.metadata

SYNC_DRIVERS = {
    "postgresql+asyncpg": "postgresql+psycopg2",
    "sqlite+aiosqlite": "sqlite",
}

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def sync_database_url(url: str) -> str:
    scheme, sep, rest = url.partition("://")
    return SYNC_DRIVERS.get(scheme, scheme) + sep + rest


config.set_main_option("sqlalchemy.url", sync_database_url(get_settings().database_url))
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout (alembic upgrade --sql)."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
