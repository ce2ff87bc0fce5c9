# inventory/main.py
import logging
import os
from typing import Optional

from fastapi import FastAPI

from inventory_sdk.app_setup import create_app_with_sdk_setup
from inventory_sdk.logging_config import setup_sdk_logging

from .api.deps import Managers
from .api.endpoints import auth, categories, products, suppliers, transactions, users
from .config import Settings, get_settings

logger = logging.getLogger("app.main")

api_routers_to_include = [
    auth.router,
    categories.router,
    suppliers.router,
    products.router,
    users.router,
    transactions.router,
]


async def inventory_after_startup():
    logger.info("Inventory service is ready to accept requests.")


async def inventory_before_shutdown():
    logger.info("Inventory service is shutting down...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Собирает приложение: настройки, менеджеры доступа к данным,
    цепочку middleware и роутеры. Глобальных реестров нет: менеджеры
    лежат в app.state.managers и попадают в эндпоинты через get_managers.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOGGING_LEVEL.upper())
    setup_sdk_logging(level=settings.LOGGING_LEVEL)
    logger.info("--- Starting Inventory Service Application Setup ---")

    app = create_app_with_sdk_setup(
        settings=settings,
        api_routers=api_routers_to_include,
        enable_auth_gate=True,
        create_tables=settings.CREATE_TABLES_ON_STARTUP,
        after_startup_hook=inventory_after_startup,
        before_shutdown_hook=inventory_before_shutdown,
        title=settings.PROJECT_NAME,
        description="Складской учет: каталог, поставщики, пользователи и движение товара.",
        version="0.1.0",
    )
    app.state.managers = Managers.build()
    logger.info("--- Inventory Service Application Setup Complete ---")
    return app


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    workers = int(os.getenv("WEB_CONCURRENCY", "1"))

    logger.info(f"Starting Uvicorn server on {host}:{port} with {workers} worker(s)...")
    uvicorn.run(
        "inventory.main:create_app",
        factory=True,
        host=host,
        port=port,
        log_level=get_settings().LOGGING_LEVEL.lower(),
        workers=workers,
    )
