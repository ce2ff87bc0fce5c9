# inventory/schemas/user.py
import uuid
from datetime import datetime
from typing import Optional

from pydantic import EmailStr
from sqlmodel import Field, SQLModel

from ..models.enums import UserRole


class UserBase(SQLModel):
    name: str = Field(min_length=1, max_length=255, description="Имя пользователя.")
    email: EmailStr = Field(description="Email адрес пользователя (уникальный).")
    phone_number: Optional[str] = Field(default=None, max_length=50, description="Телефон.")


class UserCreate(UserBase):
    """Схема регистрации (требует пароль)."""
    password: str = Field(min_length=4, max_length=72, description="Пароль (будет хеширован).")
    role: UserRole = Field(default=UserRole.MANAGER, description="Роль пользователя.")


class UserUpdate(SQLModel):
    """Схема обновления пользователя. Все поля опциональны."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(default=None, max_length=50)
    password: Optional[str] = Field(default=None, min_length=4, max_length=72)
    role: Optional[UserRole] = None


class UserRead(UserBase):
    id: uuid.UUID
    role: UserRole
    created_at: Optional[datetime] = None


class UserRef(SQLModel):
    """Краткое представление пользователя внутри транзакции."""
    id: uuid.UUID
    name: str
    email: str


class LoginRequest(SQLModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RefreshRequest(SQLModel):
    refresh_token: str = Field(min_length=1)
