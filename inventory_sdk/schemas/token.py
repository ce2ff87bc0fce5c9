from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel


class TokenPayload(BaseModel):
    """
    Схема данных (claims), содержащихся внутри JWT токена.
    """
    sub: str  # Subject: email пользователя
    user_id: UUID | None = None
    role: str | None = None
    exp: datetime
    type: Optional[Literal['access', 'refresh']] = None


class Token(BaseModel):
    """
    Схема ответа API при успешной аутентификации или обновлении токена.
    """
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
