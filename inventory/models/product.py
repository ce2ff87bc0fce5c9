# inventory/models/product.py
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Numeric
from sqlmodel import Field, Relationship

from inventory_sdk.db import BaseModelWithMeta
from inventory_sdk.filters.base import DefaultFilter

if TYPE_CHECKING:
    from .category import Category


class Product(BaseModelWithMeta, table=True):
    """
    Товар на складе.
    stock_quantity меняется только транзакциями (закупка, продажа, возврат).
    """
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    name: str = Field(index=True, max_length=255, description="Название товара.")
    sku: str = Field(index=True, unique=True, max_length=100, description="Артикул (уникальный).")
    price: Decimal = Field(
        default=Decimal("0"),
        sa_type=Numeric(12, 2),
        description="Цена за единицу.",
    )
    stock_quantity: int = Field(default=0, description="Остаток на складе.")
    description: Optional[str] = Field(default=None, max_length=1000, description="Описание товара.")
    expiry_date: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),
        description="Срок годности (если применимо).",
    )

    category_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="categories.id",
        index=True,
        ondelete="SET NULL",
        description="Категория товара.",
    )
    category: Optional["Category"] = Relationship()


class ProductFilter(DefaultFilter):
    """
    Фильтр списка товаров.
    ?search= ищет по названию, артикулу и описанию.
    """
    sku: Optional[str] = Field(default=None, description="Фильтр по точному артикулу.")
    category_id: Optional[uuid.UUID] = Field(default=None, description="Фильтр по категории.")
    stock_quantity__lte: Optional[int] = Field(default=None, description="Остаток не больше указанного.")

    class Constants(DefaultFilter.Constants):
        model = Product
        search_model_fields = ["name", "sku", "description"]
