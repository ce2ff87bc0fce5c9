# inventory/models/user.py
import logging
from typing import Optional

from sqlalchemy import Column, Text
from sqlmodel import Field

from inventory_sdk.db import BaseModelWithMeta
from inventory_sdk.filters.base import DefaultFilter

from .enums import UserRole

logger = logging.getLogger("app.models.user")


class User(BaseModelWithMeta, table=True):
    """
    Пользователь системы (администратор или менеджер склада).
    """
    __tablename__ = "users"

    name: str = Field(max_length=255, description="Имя пользователя.")
    email: str = Field(
        index=True,
        unique=True,
        max_length=255,
        description="Email адрес пользователя (уникальный, хранится в нижнем регистре)."
    )
    # Храним хеш пароля, а не сам пароль
    hashed_password: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Хешированный пароль пользователя."
    )
    phone_number: Optional[str] = Field(default=None, max_length=50, description="Телефон.")
    role: UserRole = Field(default=UserRole.MANAGER, description="Роль пользователя.")


class UserFilter(DefaultFilter):
    """
    Фильтр для запросов списка пользователей.
    Наследует стандартные поля от DefaultFilter.
    """
    email: Optional[str] = Field(default=None, description="Фильтр по точному email адресу.")
    role: Optional[UserRole] = Field(default=None, description="Фильтр по роли.")

    class Constants(DefaultFilter.Constants):
        model = User
        search_model_fields = ["name", "email"]
