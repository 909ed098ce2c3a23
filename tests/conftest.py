import asyncio
import os
import tempfile
from decimal import Decimal

# настройки читаются при импорте приложения
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "restaurant-pos-import.db")
)
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from restaurant_pos.db.base import Base
from restaurant_pos.db.session import get_async_session
from restaurant_pos.main import app
from restaurant_pos.models import DiningTable, MenuCategoryEnum, MenuItem, RoleEnum, User
from restaurant_pos.security import hash_password

PASSWORD = "secret123"


@pytest.fixture
def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'pos.db'}", poolclass=NullPool)

    async def create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_schema())
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def run_db(session_factory):
    """Выполняет async-функцию с отдельной сессией и возвращает результат."""
    def run(action):
        async def go():
            async with session_factory() as session:
                return await action(session)

        return asyncio.run(go())

    return run


@pytest.fixture
def client(session_factory):
    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(run_db):
    def make(role: RoleEnum, email: str = None, name: str = None, active: bool = True) -> User:
        email = email or f"{role.value}@bistro-staff.com"

        async def create(session):
            user = User(
                name=name or role.value.title(),
                email=email,
                password_hash=hash_password(PASSWORD),
                role=role,
                active=active,
            )
            session.add(user)
            await session.commit()
            return user

        return run_db(create)

    return make


@pytest.fixture
def login(client):
    def do_login(email: str, password: str = PASSWORD) -> dict:
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return do_login


@pytest.fixture
def make_table(run_db):
    def make(number: int, capacity: int = 4, floor: int = 1) -> DiningTable:
        async def create(session):
            table = DiningTable(number=number, capacity=capacity, floor=floor)
            session.add(table)
            await session.commit()
            return table

        return run_db(create)

    return make


@pytest.fixture
def make_menu_item(run_db):
    def make(name: str, price: str, category=MenuCategoryEnum.main_course, available: bool = True) -> MenuItem:
        async def create(session):
            item = MenuItem(name=name, price=Decimal(price), category=category, available=available)
            session.add(item)
            await session.commit()
            return item

        return run_db(create)

    return make
