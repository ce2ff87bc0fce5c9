# inventory_sdk/tests/conftest.py
import logging
import os
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from inventory_sdk.config import BaseAppSettings
from inventory_sdk.data_access.local_manager import LocalDataAccessManager
from inventory_sdk.db import session as sdk_db_session_module
from inventory_sdk.db.session import managed_session as sdk_managed_session
from inventory_sdk.tests.sample_models import Item, ItemCreate, ItemFilter, ItemUpdate

logger = logging.getLogger("inventory_sdk.tests.conftest")

TEST_SECRET_KEY = "sdk-test-secret-key-for-jwt"


class SDKTestSettings(BaseAppSettings):
    PROJECT_NAME: str = "SDKTestProject"
    API_V1_STR: str = "/api/sdktest"
    DATABASE_URL: str = "sqlite+aiosqlite://"
    SECRET_KEY: str = TEST_SECRET_KEY
    LOGGING_LEVEL: str = "DEBUG"


@pytest.fixture(scope="session", autouse=True)
def set_sdk_test_environment(request: pytest.FixtureRequest):
    original_env_value = os.environ.get("ENV")
    os.environ["ENV"] = "test"

    def finalizer():
        if original_env_value is None:
            os.environ.pop("ENV", None)
        else:
            os.environ["ENV"] = original_env_value

    request.addfinalizer(finalizer)


@pytest_asyncio.fixture
async def sdk_test_engine() -> AsyncGenerator[AsyncEngine, None]:
    # Одна in-memory база на тест (StaticPool держит единственное соединение)
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
async def init_sdk_db(
    sdk_test_engine: AsyncEngine,
    monkeypatch: pytest.MonkeyPatch,
):
    session_maker = async_sessionmaker(bind=sdk_test_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(sdk_db_session_module, "_db_engine", sdk_test_engine)
    monkeypatch.setattr(sdk_db_session_module, "_db_session_maker", session_maker)
    sdk_db_session_module._current_session.set(None)
    yield
    sdk_db_session_module._current_session.set(None)


@pytest_asyncio.fixture
async def db_session(init_sdk_db: None) -> AsyncGenerator[AsyncSession, None]:
    async with sdk_managed_session() as session:
        yield session


@pytest.fixture
def sdk_settings() -> SDKTestSettings:
    return SDKTestSettings()


@pytest.fixture
def item_manager(db_session: AsyncSession) -> LocalDataAccessManager[Item, ItemCreate, ItemUpdate]:
    return LocalDataAccessManager(
        model_name="Item",
        model_cls=Item,
        create_schema_cls=ItemCreate,
        update_schema_cls=ItemUpdate,
        filter_cls=ItemFilter,
    )


@pytest_asyncio.fixture
async def sample_items(item_manager: LocalDataAccessManager[Item, ItemCreate, ItemUpdate]) -> List[Item]:
    items_data = [
        {"name": "Apple", "description": "Red fruit", "value": 10},
        {"name": "Banana", "description": "Yellow fruit", "value": 20},
        {"name": "Cherry", "description": "Red small fruit", "value": 15},
        {"name": "Date", "description": "Brown sweet fruit", "value": 20},
        {"name": "Elderberry", "description": "Dark berry", "value": 25},
    ]
    return [await item_manager.create(ItemCreate(**data)) for data in items_data]
