# inventory/api/endpoints/products.py
import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi_filter import FilterDepends

from inventory_sdk.dependencies.auth import get_current_identity
from inventory_sdk.schemas.pagination import PaginatedResponse

from ... import mappers
from ...models import ProductFilter
from ...schemas.product import ProductCreate, ProductRead, ProductUpdate
from ..deps import Managers, PageParams, get_managers, get_page_params, require_admin

logger = logging.getLogger("app.api.endpoints.products")

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    dependencies=[Depends(get_current_identity)],
)

admin_only = [Depends(require_admin)]


@router.get("", response_model=PaginatedResponse[ProductRead])
async def list_products(
    filters: ProductFilter = FilterDepends(ProductFilter),
    paging: PageParams = Depends(get_page_params),
    managers: Managers = Depends(get_managers),
) -> Any:
    """Список товаров. ?search= ищет по названию, артикулу и описанию."""
    result = await managers.products.list(page=paging.page, size=paging.size, filters=filters)
    result["items"] = [mappers.product_to_read(p) for p in result["items"]]
    return result


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: UUID, managers: Managers = Depends(get_managers)) -> Any:
    return mappers.product_to_read(await managers.products.get_or_404(product_id))


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED, dependencies=admin_only)
async def create_product(data: ProductCreate, managers: Managers = Depends(get_managers)) -> Any:
    product = await managers.products.create(data)
    logger.info(f"Product '{product.sku}' created with stock {product.stock_quantity}")
    return mappers.product_to_read(product)


@router.put("/{product_id}", response_model=ProductRead, dependencies=admin_only)
async def update_product(
    product_id: UUID, data: ProductUpdate, managers: Managers = Depends(get_managers)
) -> Any:
    return mappers.product_to_read(await managers.products.update(product_id, data))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=admin_only)
async def delete_product(product_id: UUID, managers: Managers = Depends(get_managers)) -> None:
    await managers.products.delete(product_id)
