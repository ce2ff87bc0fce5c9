# inventory/models/category.py
import logging
from typing import Optional

from sqlmodel import Field

from inventory_sdk.db import BaseModelWithMeta
from inventory_sdk.filters.base import DefaultFilter

logger = logging.getLogger("app.models.category")


class Category(BaseModelWithMeta, table=True):
    """Категория товаров."""
    __tablename__ = "categories"

    name: str = Field(
        index=True,
        unique=True,
        max_length=255,
        description="Название категории (уникальное)."
    )


class CategoryFilter(DefaultFilter):
    name: Optional[str] = Field(default=None, description="Фильтр по точному названию.")
    name__ilike: Optional[str] = Field(default=None, description="Фильтр по части названия (без учета регистра).")

    class Constants(DefaultFilter.Constants):
        model = Category
        search_model_fields = ["name"]
