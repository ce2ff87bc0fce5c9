# inventory/tests/conftest.py
import logging
import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator, Dict, Optional

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from inventory_sdk.db import session as sdk_db_session_module
from inventory_sdk.db.session import managed_session
from inventory_sdk.security import create_access_token

from inventory.config import Settings
from inventory.data_access import UserDataAccessManager
from inventory.main import create_app
from inventory.models import (
    Category,
    Product,
    Supplier,
    Transaction,
    TransactionStatus,
    TransactionType,
    User,
    UserRole,
)
from inventory.schemas.user import UserCreate

logger = logging.getLogger("app.tests.conftest")

TEST_PASSWORD = "secret-password"


@pytest.fixture(scope="session", autouse=True)
def set_test_environment(request: pytest.FixtureRequest):
    original_env_value = os.environ.get("ENV")
    os.environ["ENV"] = "test"

    def finalizer():
        if original_env_value is None:
            os.environ.pop("ENV", None)
        else:
            os.environ["ENV"] = original_env_value

    request.addfinalizer(finalizer)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite+aiosqlite://",
        SECRET_KEY="inventory-test-secret",
        LOGGING_LEVEL="INFO",
        DEFAULT_PAGE_SIZE=50,
        MAX_PAGE_SIZE=100,
    )


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def init_test_db(test_engine: AsyncEngine, monkeypatch: pytest.MonkeyPatch):
    """Подменяет глобальные движок и фабрику сессий SDK на in-memory SQLite."""
    session_maker = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(sdk_db_session_module, "_db_engine", test_engine)
    monkeypatch.setattr(sdk_db_session_module, "_db_session_maker", session_maker)
    sdk_db_session_module._current_session.set(None)
    yield
    sdk_db_session_module._current_session.set(None)


@pytest_asyncio.fixture
async def db_session(init_test_db: None) -> AsyncGenerator[AsyncSession, None]:
    async with managed_session() as session:
        yield session


@pytest.fixture
def app(test_settings: Settings, init_test_db: None) -> FastAPI:
    return create_app(test_settings)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as async_client:
        yield async_client


@pytest.fixture
def api_prefix(test_settings: Settings) -> str:
    return test_settings.API_V1_STR


# --- Данные ---
# Каждый помощник открывает и закрывает свою сессию, чтобы запросы клиента
# не переиспользовали сессию теста через contextvar.


async def create_user(email: str, role: UserRole, name: str = "Test User") -> User:
    async with managed_session():
        return await UserDataAccessManager().create(
            UserCreate(name=name, email=email, password=TEST_PASSWORD, role=role)
        )


async def add_rows(*rows) -> None:
    async with managed_session() as session:
        for row in rows:
            session.add(row)
        await session.commit()


def make_headers(user: User, settings: Settings) -> Dict[str, str]:
    token = create_access_token(
        data={"sub": user.email, "user_id": str(user.id), "role": user.role.value},
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expires_delta=timedelta(minutes=5),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin_user(init_test_db: None) -> User:
    return await create_user("admin@example.com", UserRole.ADMIN, name="Admin")


@pytest_asyncio.fixture
async def manager_user(init_test_db: None) -> User:
    return await create_user("manager@example.com", UserRole.MANAGER, name="Manager")


@pytest.fixture
def admin_headers(admin_user: User, test_settings: Settings) -> Dict[str, str]:
    return make_headers(admin_user, test_settings)


@pytest.fixture
def manager_headers(manager_user: User, test_settings: Settings) -> Dict[str, str]:
    return make_headers(manager_user, test_settings)


@pytest_asyncio.fixture
async def catalog(init_test_db: None) -> Dict[str, object]:
    """Категория, два поставщика и два товара."""
    electronics = Category(name="Electronics")
    acme = Supplier(name="Acme Corp", contact_info="acme@example.com", address="1 Main St")
    globex = Supplier(name="Globex", contact_info="globex@example.com", address="2 Side St")
    laptop = Product(
        name="Gaming Laptop",
        sku="LAP-001",
        price=Decimal("1000.00"),
        stock_quantity=10,
        category_id=electronics.id,
    )
    mouse = Product(name="Wireless Mouse", sku="MOU-001", price=Decimal("25.50"), stock_quantity=3)
    await add_rows(electronics, acme, globex)
    await add_rows(laptop, mouse)
    return {"category": electronics, "acme": acme, "globex": globex, "laptop": laptop, "mouse": mouse}


def make_transaction(
    product: Product,
    created_at: datetime,
    supplier: Optional[Supplier] = None,
    description: Optional[str] = None,
    transaction_type: TransactionType = TransactionType.PURCHASE,
    quantity: int = 1,
    user: Optional[User] = None,
) -> Transaction:
    return Transaction(
        transaction_type=transaction_type,
        status=TransactionStatus.COMPLETED,
        quantity=quantity,
        total_price=product.price * quantity,
        description=description,
        product_id=product.id,
        supplier_id=supplier.id if supplier else None,
        user_id=user.id if user else None,
        created_at=created_at,
        updated_at=created_at,
    )


def at(year: int, month: int, day: int = 15, hour: int = 12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)
