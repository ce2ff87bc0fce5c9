# inventory/api/deps.py
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Query, Request, status

from inventory_sdk.config import BaseAppSettings
from inventory_sdk.dependencies.auth import get_current_identity, require_role
from inventory_sdk.exceptions import ConfigurationError, InvalidArgumentError
from inventory_sdk.schemas.identity import RequestIdentity

from ..data_access import (
    CategoryDataAccessManager,
    ProductDataAccessManager,
    SupplierDataAccessManager,
    TransactionDataAccessManager,
    UserDataAccessManager,
)
from ..models import User, UserRole

logger = logging.getLogger("app.api.deps")


@dataclass(frozen=True)
class Managers:
    """Менеджеры доступа к данным, создаются один раз в create_app()."""
    categories: CategoryDataAccessManager
    suppliers: SupplierDataAccessManager
    products: ProductDataAccessManager
    users: UserDataAccessManager
    transactions: TransactionDataAccessManager

    @classmethod
    def build(cls) -> "Managers":
        return cls(
            categories=CategoryDataAccessManager(),
            suppliers=SupplierDataAccessManager(),
            products=ProductDataAccessManager(),
            users=UserDataAccessManager(),
            transactions=TransactionDataAccessManager(),
        )


def get_managers(request: Request) -> Managers:
    managers = getattr(request.app.state, "managers", None)
    if not isinstance(managers, Managers):
        raise ConfigurationError("Data access managers are not initialized on app.state.")
    return managers


def get_settings(request: Request) -> BaseAppSettings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise ConfigurationError("Settings are not initialized on app.state.")
    return settings


@dataclass(frozen=True)
class PageParams:
    page: int
    size: int


def get_page_params(
    page: int = Query(0, ge=0, description="Номер страницы (с 0)."),
    size: Optional[int] = Query(None, ge=1, description="Размер страницы."),
    settings: BaseAppSettings = Depends(get_settings),
) -> PageParams:
    effective_size = size or settings.DEFAULT_PAGE_SIZE
    if effective_size > settings.MAX_PAGE_SIZE:
        raise InvalidArgumentError(f"Page size must not exceed {settings.MAX_PAGE_SIZE}")
    return PageParams(page=page, size=effective_size)


async def get_current_user(
    identity: RequestIdentity = Depends(get_current_identity),
    managers: Managers = Depends(get_managers),
) -> User:
    """Пользователь из БД для текущей identity. Удаленный пользователь получает 401."""
    user = await managers.users.get_for_identity(identity)
    if user is None:
        logger.warning(f"Identity '{identity.subject}' does not match any user.")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def require_admin(
    identity: RequestIdentity = Depends(require_role(UserRole.ADMIN.value)),
    current_user: User = Depends(get_current_user),
) -> User:
    """
    Администратор по токену и по текущей записи в БД.
    Роль из токена проверяется первой, затем роль пользователя в БД:
    понижение роли действует сразу, не дожидаясь истечения токена.
    """
    if current_user.role != UserRole.ADMIN:
        logger.warning(f"Admin check denied for '{identity.subject}': stored role is {current_user.role.value}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return current_user
