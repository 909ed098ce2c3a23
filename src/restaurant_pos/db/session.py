from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from restaurant_pos.config import settings


def engine_options(url: str) -> dict:
    """Параметры движка: для sqlite (локальный запуск, тесты) без pre-ping."""
    options = {"echo": settings.SQL_ECHO, "future": True}
    if make_url(url).get_backend_name() != "sqlite":
        options["pool_pre_ping"] = True
    return options


# Асинхронный движок
engine = create_async_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# Фабрика сессий: объекты остаются доступными после commit
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Сессия на один запрос.
    Пример: async def endpoint(db: AsyncSession = Depends(get_async_session))
    """
    async with AsyncSessionLocal() as session:
        yield session
