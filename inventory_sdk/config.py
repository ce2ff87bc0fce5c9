# inventory_sdk/config.py
import os
from typing import List

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
)


class BaseAppSettings(BaseSettings):
    PROJECT_NAME: str = "InventoryService"
    API_V1_STR: str = "/api/v1"
    LOGGING_LEVEL: str = Field(
        "INFO",
        json_schema_extra={"examples": ["DEBUG", "INFO", "WARNING", "ERROR"]}
    )
    BACKEND_CORS_ORIGINS: List[str] = []
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 5
    ENV: str = os.getenv("ENV", "PROD")
    SECRET_KEY: str = "changethis"
    ALGORITHM: str = "HS256"
    DATABASE_URL: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        60 * 6, description="Время жизни access токена в минутах (6 часов)."
    )
    REFRESH_TOKEN_EXPIRE_MINUTES: int = Field(
        60 * 24 * 7, description="Время жизни refresh токена в минутах (7 дней)."
    )
    DEFAULT_PAGE_SIZE: int = Field(50, description="Размер страницы списков по умолчанию.")
    MAX_PAGE_SIZE: int = Field(1000, description="Максимальный размер страницы списков.")

    model_config = SettingsConfigDict(
        extra='ignore',
    )
