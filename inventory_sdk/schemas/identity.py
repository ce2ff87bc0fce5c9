# inventory_sdk/schemas/identity.py
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestIdentity(BaseModel):
    """
    Личность вызывающей стороны, восстановленная из access токена.
    Живет только в рамках одного запроса (request.scope["user"]).
    """

    model_config = ConfigDict(frozen=True)

    subject: str = Field(description="Идентификатор субъекта токена (email пользователя).")
    role: Optional[str] = Field(None, description="Роль пользователя (admin, manager).")
    user_id: Optional[uuid.UUID] = Field(None, description="ID пользователя, если он есть в токене.")

    def has_role(self, *roles: str) -> bool:
        return self.role is not None and self.role.lower() in {r.lower() for r in roles}
