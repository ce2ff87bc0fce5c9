# inventory_sdk/app_setup.py
import logging
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware import Middleware
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from inventory_sdk.config import BaseAppSettings
from inventory_sdk.db.session import close_db, create_db_and_tables, init_db
from inventory_sdk.exceptions import InventorySDKError
from inventory_sdk.middleware.auth import AuthGateMiddleware
from inventory_sdk.middleware.middleware import DBSessionMiddleware

logger = logging.getLogger("inventory_sdk.app_setup")


@asynccontextmanager
async def sdk_lifespan_manager(
    app: FastAPI,
    settings: BaseAppSettings,
    create_tables: bool = False,
    after_startup_hook: Optional[Callable[[], Awaitable[None]]] = None,
    before_shutdown_hook: Optional[Callable[[], Awaitable[None]]] = None,
):
    """
    Управляет ресурсами SDK (движок БД) в рамках жизненного цикла FastAPI.
    """
    logger.info("SDK Lifespan: Starting up...")
    try:
        init_db(
            str(settings.DATABASE_URL),
            engine_options={
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_recycle": 300,
            },
            echo=settings.LOGGING_LEVEL.upper() == "DEBUG",
        )
    except Exception as e:
        logger.critical("SDK Lifespan: Database initialization failed.", exc_info=True)
        raise RuntimeError("Database initialization failed.") from e

    try:
        if create_tables:
            await create_db_and_tables()
        if after_startup_hook:
            logger.info("SDK Lifespan: Running after_startup_hook...")
            await after_startup_hook()

        logger.info("SDK Lifespan: Startup sequence complete. Application running...")
        yield

        if before_shutdown_hook:
            logger.info("SDK Lifespan: Running before_shutdown_hook...")
            await before_shutdown_hook()
    finally:
        await close_db()
        logger.info("SDK Lifespan: Shutdown sequence complete.")


def build_middleware_stack(
    settings: BaseAppSettings,
    enable_auth_gate: bool = True,
) -> List[Middleware]:
    """
    Упорядоченный список стадий обработки запроса (первая - внешняя):
    CORS -> сессия БД -> гейт аутентификации -> роутер.
    """
    stack: List[Middleware] = []
    if settings.BACKEND_CORS_ORIGINS:
        stack.append(
            Middleware(
                CORSMiddleware,
                allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            )
        )
    stack.append(Middleware(DBSessionMiddleware))
    if enable_auth_gate:
        stack.append(
            Middleware(
                AuthGateMiddleware,
                secret_key=settings.SECRET_KEY,
                algorithm=settings.ALGORITHM,
            )
        )
    return stack


async def sdk_error_handler(request: Request, exc: InventorySDKError) -> JSONResponse:
    content: Dict[str, Any] = {"detail": exc.message}
    if exc.details:
        content["errors"] = exc.details.get("errors", exc.details)
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Переводит исключения SDK в HTTP ответы {'detail': ...}."""
    app.add_exception_handler(InventorySDKError, sdk_error_handler)  # type: ignore[arg-type]


def create_app_with_sdk_setup(
    settings: BaseAppSettings,
    api_routers: Sequence[APIRouter],
    enable_auth_gate: bool = True,
    create_tables: bool = False,
    after_startup_hook: Optional[Callable[[], Awaitable[None]]] = None,
    before_shutdown_hook: Optional[Callable[[], Awaitable[None]]] = None,
    title: Optional[str] = None,
    description: Optional[str] = None,
    version: Optional[str] = "0.1.0",
    include_health_check: bool = True,
) -> FastAPI:
    """
    Создает FastAPI приложение со стандартной обвязкой SDK.

    :param enable_auth_gate: Включать ли AuthGateMiddleware.
    :param create_tables: Создавать ли таблицы при старте (dev/test).
    """
    effective_title = title or settings.PROJECT_NAME
    logger.info(f"Creating FastAPI app '{effective_title}' with SDK setup...")

    @asynccontextmanager
    async def app_lifespan_wrapper(app: FastAPI):
        async with sdk_lifespan_manager(
            app=app,
            settings=settings,
            create_tables=create_tables,
            after_startup_hook=after_startup_hook,
            before_shutdown_hook=before_shutdown_hook,
        ):
            yield

    app = FastAPI(
        title=effective_title,
        description=description or f"{settings.PROJECT_NAME} application.",
        version=version,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=app_lifespan_wrapper,
        middleware=build_middleware_stack(settings, enable_auth_gate=enable_auth_gate),
    )
    app.state.settings = settings
    register_exception_handlers(app)

    for router in api_routers:
        app.include_router(router, prefix=settings.API_V1_STR)
        logger.debug(f"Included router with prefix '{router.prefix}' under '{settings.API_V1_STR}'.")

    if include_health_check:
        @app.get("/health", tags=["Health"], summary="Health check")
        async def health_check():
            return {"status": "ok"}

    logger.info(f"FastAPI app '{effective_title}' created.")
    return app
