# inventory_sdk/dependencies/auth.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from inventory_sdk.schemas.identity import RequestIdentity

logger = logging.getLogger("inventory_sdk.dependencies.auth")


def get_optional_identity(request: Request) -> Optional[RequestIdentity]:
    """
    Возвращает RequestIdentity, установленную AuthGateMiddleware, или None.
    Не вызывает ошибку, если identity нет.
    """
    identity = request.scope.get("user")
    if identity is not None and not isinstance(identity, RequestIdentity):
        logger.error(f"Invalid object type found in request.user: {type(identity)}. Expected RequestIdentity or None.")
        return None
    return identity


def get_current_identity(
    identity: Optional[RequestIdentity] = Depends(get_optional_identity),
) -> RequestIdentity:
    """
    Возвращает RequestIdentity или 401, если гейт не прикрепил identity
    (токена нет, либо он невалиден или просрочен: эти случаи не различаются).
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


def require_role(*roles: str):
    """
    Фабрика зависимостей: пропускает только пользователей с одной из ролей.

    :param roles: Допустимые роли (регистр не важен).
    """
    async def _check_role(
        identity: RequestIdentity = Depends(get_current_identity),
    ) -> RequestIdentity:
        if not identity.has_role(*roles):
            logger.warning(f"Role check {roles} denied for subject '{identity.subject}' (role={identity.role})")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return identity
    return _check_role
