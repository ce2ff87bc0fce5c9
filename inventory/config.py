# inventory/config.py
import logging
import os
from functools import lru_cache
from typing import List, Optional, Union

from pydantic import Field, field_validator

from inventory_sdk.config import BaseAppSettings, SettingsConfigDict

logger = logging.getLogger("app.config")

# --- Определение путей ---
CONFIG_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(CONFIG_DIR, ".."))
ENV_FILE_PATH = os.path.join(PROJECT_ROOT, ".env")
ENV_TEST_FILE_PATH = os.path.join(PROJECT_ROOT, ".env.test")

# Значение ENV определяет, какой .env файл будет загружен
CURRENT_ENV = os.getenv("ENV", "prod").lower()
effective_env_file_path = ENV_TEST_FILE_PATH if CURRENT_ENV == "test" else ENV_FILE_PATH


class Settings(BaseAppSettings):
    """
    Конфигурация сервиса складского учета.
    Загружает значения из переменных окружения и .env файла.
    """
    PROJECT_NAME: str = "InventoryService"

    DATABASE_URL: str = Field(..., description="URL базы данных (postgresql+asyncpg://... или sqlite+aiosqlite://...).")
    SECRET_KEY: str = Field(..., description="Секретный ключ для подписи JWT токенов.")
    ALGORITHM: str = Field("HS256", description="Алгоритм подписи JWT токенов.")

    # Создавать таблицы при старте (для dev окружений без миграций)
    CREATE_TABLES_ON_STARTUP: bool = Field(False, description="Создавать таблицы из метаданных SQLModel при старте.")

    ENV: str = Field(CURRENT_ENV, description="Текущее окружение (dev, test, prod). Влияет на загрузку .env файла.")

    model_config = SettingsConfigDict(
        env_file=effective_env_file_path,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Optional[Union[str, List[str]]]) -> List[str]:
        """
        Позволяет задавать BACKEND_CORS_ORIGINS в .env как строку через запятую
        или как список строк.
        """
        if isinstance(v, str) and v:
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        elif isinstance(v, list):
            return [str(origin).strip() for origin in v if str(origin).strip()]
        return []


@lru_cache()
def get_settings() -> Settings:
    """Загружает настройки один раз за процесс."""
    try:
        loaded = Settings()
    except Exception as e:
        logger.critical(
            f"Failed to load or validate settings from '{effective_env_file_path}' and environment variables.",
            exc_info=True,
        )
        raise RuntimeError(f"Could not load application settings: {e}") from e

    # НЕ ЛОГИРУЙТЕ СЕКРЕТЫ!
    logger.info(f"Settings loaded successfully for ENV='{loaded.ENV}'.")
    logger.info(f"Project Name: {loaded.PROJECT_NAME}")
    logger.info(f"Logging Level: {loaded.LOGGING_LEVEL}")
    logger.info(f"CORS Origins: {loaded.BACKEND_CORS_ORIGINS}")
    if not os.path.exists(effective_env_file_path):
        logger.warning(f".env file not found at {effective_env_file_path}. Relying solely on environment variables.")
    return loaded
