# inventory/schemas/product.py
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel

from .category import CategoryRead


class ProductBase(SQLModel):
    name: str = Field(min_length=1, max_length=255, description="Название товара.")
    sku: str = Field(min_length=1, max_length=100, description="Артикул (уникальный).")
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2, description="Цена за единицу.")
    description: Optional[str] = Field(default=None, max_length=1000, description="Описание.")
    expiry_date: Optional[datetime] = Field(default=None, description="Срок годности.")
    category_id: Optional[uuid.UUID] = Field(default=None, description="ID категории.")


class ProductCreate(ProductBase):
    stock_quantity: int = Field(default=0, ge=0, description="Начальный остаток.")


class ProductUpdate(SQLModel):
    """Все поля опциональны. Остаток можно скорректировать вручную (инвентаризация)."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    sku: Optional[str] = Field(default=None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None, max_length=1000)
    expiry_date: Optional[datetime] = None
    category_id: Optional[uuid.UUID] = None


class ProductRead(ProductBase):
    id: uuid.UUID
    stock_quantity: int
    category: Optional[CategoryRead] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductRef(SQLModel):
    """Краткое представление товара внутри транзакции."""
    id: uuid.UUID
    name: str
    sku: str
    price: Decimal
