# inventory_sdk/tests/test_app_setup.py
from unittest import mock

import httpx
import pytest
from fastapi import APIRouter
from starlette.middleware.cors import CORSMiddleware

from inventory_sdk import app_setup
from inventory_sdk.app_setup import build_middleware_stack, create_app_with_sdk_setup
from inventory_sdk.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from inventory_sdk.middleware.auth import AuthGateMiddleware
from inventory_sdk.middleware.middleware import DBSessionMiddleware
from inventory_sdk.tests.conftest import SDKTestSettings

pytestmark = pytest.mark.asyncio


def make_router() -> APIRouter:
    router = APIRouter(prefix="/errors")

    @router.get("/not-found")
    async def raise_not_found():
        raise NotFoundError("Thing not found")

    @router.get("/conflict")
    async def raise_conflict():
        raise ConflictError("Already exists")

    @router.get("/invalid")
    async def raise_invalid():
        raise InvalidArgumentError("Bad month", details={"errors": [{"loc": ["month"]}]})

    return router


async def test_middleware_stack_order():
    settings = SDKTestSettings(BACKEND_CORS_ORIGINS=["http://test-origin.com"])
    stack = build_middleware_stack(settings)
    assert [m.cls for m in stack] == [CORSMiddleware, DBSessionMiddleware, AuthGateMiddleware]


async def test_middleware_stack_without_cors_and_gate():
    stack = build_middleware_stack(SDKTestSettings(), enable_auth_gate=False)
    assert [m.cls for m in stack] == [DBSessionMiddleware]


@pytest.mark.parametrize(
    "path,status_code,detail",
    [
        ("/api/sdktest/errors/not-found", 404, "Thing not found"),
        ("/api/sdktest/errors/conflict", 409, "Already exists"),
        ("/api/sdktest/errors/invalid", 400, "Bad month"),
    ],
)
async def test_sdk_errors_rendered_as_json(init_sdk_db, path: str, status_code: int, detail: str):
    app = create_app_with_sdk_setup(settings=SDKTestSettings(), api_routers=[make_router()])
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get(path)
    assert response.status_code == status_code
    assert response.json()["detail"] == detail


async def test_invalid_argument_error_includes_errors(init_sdk_db):
    app = create_app_with_sdk_setup(settings=SDKTestSettings(), api_routers=[make_router()])
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/sdktest/errors/invalid")
    assert response.json()["errors"] == [{"loc": ["month"]}]


async def test_health_check(init_sdk_db):
    app = create_app_with_sdk_setup(settings=SDKTestSettings(), api_routers=[])
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_lifespan_initializes_and_closes_db():
    settings = SDKTestSettings()
    app = create_app_with_sdk_setup(settings=settings, api_routers=[])
    after_startup = mock.AsyncMock()
    with mock.patch.object(app_setup, "init_db") as init_db_mock, \
            mock.patch.object(app_setup, "close_db", new=mock.AsyncMock()) as close_db_mock:
        async with app_setup.sdk_lifespan_manager(app, settings, after_startup_hook=after_startup):
            init_db_mock.assert_called_once()
            assert init_db_mock.call_args.args[0] == settings.DATABASE_URL
            after_startup.assert_awaited_once()
        close_db_mock.assert_awaited_once()
