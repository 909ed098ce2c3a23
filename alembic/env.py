import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from restaurant_pos.config import settings
from restaurant_pos.db.base import Base
import restaurant_pos.models  # noqa: F401  регистрирует таблицы в metadata

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# alembic.ini может переопределить URL, по умолчанию берём из настроек
DATABASE_URL = config.get_main_option("sqlalchemy.url") or settings.DATABASE_URL


def is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def configure(**kwargs):
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # sqlite не умеет ALTER COLUMN
        render_as_batch=is_sqlite(DATABASE_URL),
        **kwargs,
    )


def run_migrations_offline():
    """Offline mode: печатает SQL без подключения к базе."""
    url = make_url(DATABASE_URL)
    if url.drivername == "postgresql+asyncpg":
        url = url.set(drivername="postgresql+psycopg2")
    configure(url=url, literal_binds=True, dialect_opts={"paramstyle": "named"})

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    configure(connection=connection)

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online():
    """Async-движок, сами миграции синхронно через run_sync."""
    connectable = create_async_engine(DATABASE_URL, poolclass=pool.NullPool)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
