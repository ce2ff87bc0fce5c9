# inventory/api/endpoints/categories.py
import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi_filter import FilterDepends

from inventory_sdk.dependencies.auth import get_current_identity
from inventory_sdk.schemas.pagination import PaginatedResponse

from ... import mappers
from ...models import CategoryFilter
from ...schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from ..deps import Managers, PageParams, get_managers, get_page_params, require_admin

logger = logging.getLogger("app.api.endpoints.categories")

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
    dependencies=[Depends(get_current_identity)],
)

admin_only = [Depends(require_admin)]


@router.get("", response_model=PaginatedResponse[CategoryRead])
async def list_categories(
    filters: CategoryFilter = FilterDepends(CategoryFilter),
    paging: PageParams = Depends(get_page_params),
    managers: Managers = Depends(get_managers),
) -> Any:
    result = await managers.categories.list(page=paging.page, size=paging.size, filters=filters)
    result["items"] = [mappers.category_to_read(c) for c in result["items"]]
    return result


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(category_id: UUID, managers: Managers = Depends(get_managers)) -> Any:
    return mappers.category_to_read(await managers.categories.get_or_404(category_id))


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED, dependencies=admin_only)
async def create_category(data: CategoryCreate, managers: Managers = Depends(get_managers)) -> Any:
    return mappers.category_to_read(await managers.categories.create(data))


@router.put("/{category_id}", response_model=CategoryRead, dependencies=admin_only)
async def update_category(
    category_id: UUID, data: CategoryUpdate, managers: Managers = Depends(get_managers)
) -> Any:
    return mappers.category_to_read(await managers.categories.update(category_id, data))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=admin_only)
async def delete_category(category_id: UUID, managers: Managers = Depends(get_managers)) -> None:
    await managers.categories.delete(category_id)
