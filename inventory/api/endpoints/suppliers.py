# inventory/api/endpoints/suppliers.py
import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi_filter import FilterDepends

from inventory_sdk.dependencies.auth import get_current_identity
from inventory_sdk.schemas.pagination import PaginatedResponse

from ... import mappers
from ...models import SupplierFilter
from ...schemas.supplier import SupplierCreate, SupplierRead, SupplierUpdate
from ..deps import Managers, PageParams, get_managers, get_page_params, require_admin

logger = logging.getLogger("app.api.endpoints.suppliers")

router = APIRouter(
    prefix="/suppliers",
    tags=["Suppliers"],
    dependencies=[Depends(get_current_identity)],
)

admin_only = [Depends(require_admin)]


@router.get("", response_model=PaginatedResponse[SupplierRead])
async def list_suppliers(
    filters: SupplierFilter = FilterDepends(SupplierFilter),
    paging: PageParams = Depends(get_page_params),
    managers: Managers = Depends(get_managers),
) -> Any:
    result = await managers.suppliers.list(page=paging.page, size=paging.size, filters=filters)
    result["items"] = [mappers.supplier_to_read(s) for s in result["items"]]
    return result


@router.get("/{supplier_id}", response_model=SupplierRead)
async def get_supplier(supplier_id: UUID, managers: Managers = Depends(get_managers)) -> Any:
    return mappers.supplier_to_read(await managers.suppliers.get_or_404(supplier_id))


@router.post("", response_model=SupplierRead, status_code=status.HTTP_201_CREATED, dependencies=admin_only)
async def create_supplier(data: SupplierCreate, managers: Managers = Depends(get_managers)) -> Any:
    return mappers.supplier_to_read(await managers.suppliers.create(data))


@router.put("/{supplier_id}", response_model=SupplierRead, dependencies=admin_only)
async def update_supplier(
    supplier_id: UUID, data: SupplierUpdate, managers: Managers = Depends(get_managers)
) -> Any:
    return mappers.supplier_to_read(await managers.suppliers.update(supplier_id, data))


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=admin_only)
async def delete_supplier(supplier_id: UUID, managers: Managers = Depends(get_managers)) -> None:
    await managers.suppliers.delete(supplier_id)
