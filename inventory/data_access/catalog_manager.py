# inventory/data_access/catalog_manager.py
import logging
from typing import Any, Dict, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import selectinload

from inventory_sdk.data_access import LocalDataAccessManager
from inventory_sdk.exceptions import NotFoundError

from ..models import Category, CategoryFilter, Product, ProductFilter, Supplier, SupplierFilter
from ..schemas.category import CategoryCreate, CategoryUpdate
from ..schemas.product import ProductCreate, ProductUpdate
from ..schemas.supplier import SupplierCreate, SupplierUpdate

logger = logging.getLogger("app.data_access.catalog_manager")


class CategoryDataAccessManager(LocalDataAccessManager[Category, CategoryCreate, CategoryUpdate]):
    def __init__(self):
        super().__init__(
            model_name="Category",
            model_cls=Category,
            create_schema_cls=CategoryCreate,
            update_schema_cls=CategoryUpdate,
            filter_cls=CategoryFilter,
        )


class SupplierDataAccessManager(LocalDataAccessManager[Supplier, SupplierCreate, SupplierUpdate]):
    def __init__(self):
        super().__init__(
            model_name="Supplier",
            model_cls=Supplier,
            create_schema_cls=SupplierCreate,
            update_schema_cls=SupplierUpdate,
            filter_cls=SupplierFilter,
        )


class ProductDataAccessManager(LocalDataAccessManager[Product, ProductCreate, ProductUpdate]):
    """
    Товары. Категория подгружается вместе с товаром,
    ссылка на несуществующую категорию дает NotFoundError.
    """

    def __init__(self):
        super().__init__(
            model_name="Product",
            model_cls=Product,
            create_schema_cls=ProductCreate,
            update_schema_cls=ProductUpdate,
            filter_cls=ProductFilter,
        )

    def load_options(self) -> Sequence[Any]:
        return (selectinload(Product.category),)  # type: ignore[arg-type]

    async def _ensure_category_exists(self, category_id: Optional[UUID]) -> None:
        if category_id is None:
            return
        if await self.session.get(Category, category_id) is None:
            logger.warning(f"Product references missing category {category_id}")
            raise NotFoundError(f"Category with id {category_id} not found")

    async def _prepare_for_create(self, validated_data: ProductCreate) -> Product:
        await self._ensure_category_exists(validated_data.category_id)
        return await super()._prepare_for_create(validated_data)

    async def _prepare_for_update(
        self, db_item: Product, update_payload: Dict[str, Any]
    ) -> tuple[Product, bool]:
        if "category_id" in update_payload:
            await self._ensure_category_exists(update_payload["category_id"])
        return await super()._prepare_for_update(db_item, update_payload)
