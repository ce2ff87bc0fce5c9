# inventory/api/endpoints/users.py
import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi_filter import FilterDepends

from inventory_sdk.schemas.pagination import PaginatedResponse

from ... import mappers
from ...models import User, UserFilter
from ...schemas.transaction import TransactionRead
from ...schemas.user import UserRead, UserUpdate
from ..deps import Managers, PageParams, get_current_user, get_managers, get_page_params, require_admin

logger = logging.getLogger("app.api.endpoints.users")

router = APIRouter(prefix="/users", tags=["Users"])

admin_only = [Depends(require_admin)]


@router.get("/current", response_model=UserRead, summary="Get Current User")
async def read_current_user(current_user: User = Depends(get_current_user)) -> Any:
    """Возвращает данные текущего аутентифицированного пользователя."""
    logger.info(f"Request for current user data by user ID: {current_user.id}")
    return mappers.user_to_read(current_user)


@router.get("/current/transactions", response_model=PaginatedResponse[TransactionRead])
async def read_current_user_transactions(
    current_user: User = Depends(get_current_user),
    paging: PageParams = Depends(get_page_params),
    managers: Managers = Depends(get_managers),
) -> Any:
    result = await managers.transactions.list_for_user(current_user.id, page=paging.page, size=paging.size)
    result["items"] = [mappers.transaction_to_read(t) for t in result["items"]]
    return result


@router.get("", response_model=PaginatedResponse[UserRead], dependencies=admin_only)
async def list_users(
    filters: UserFilter = FilterDepends(UserFilter),
    paging: PageParams = Depends(get_page_params),
    managers: Managers = Depends(get_managers),
) -> Any:
    result = await managers.users.list(page=paging.page, size=paging.size, filters=filters)
    result["items"] = [mappers.user_to_read(u) for u in result["items"]]
    return result


@router.get("/{user_id}", response_model=UserRead, dependencies=admin_only)
async def get_user(user_id: UUID, managers: Managers = Depends(get_managers)) -> Any:
    return mappers.user_to_read(await managers.users.get_or_404(user_id))


@router.put("/{user_id}", response_model=UserRead, dependencies=admin_only)
async def update_user(user_id: UUID, data: UserUpdate, managers: Managers = Depends(get_managers)) -> Any:
    return mappers.user_to_read(await managers.users.update(user_id, data))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=admin_only)
async def delete_user(user_id: UUID, managers: Managers = Depends(get_managers)) -> None:
    await managers.users.delete(user_id)
