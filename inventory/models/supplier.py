# inventory/models/supplier.py
from typing import Optional

from sqlmodel import Field

from inventory_sdk.db import BaseModelWithMeta
from inventory_sdk.filters.base import DefaultFilter


class Supplier(BaseModelWithMeta, table=True):
    """Поставщик товаров."""
    __tablename__ = "suppliers"

    name: str = Field(index=True, max_length=255, description="Название поставщика.")
    contact_info: Optional[str] = Field(default=None, max_length=255, description="Контакты (телефон, email).")
    address: Optional[str] = Field(default=None, max_length=500, description="Адрес поставщика.")


class SupplierFilter(DefaultFilter):
    """Фильтр списка поставщиков. ?search= ищет по названию, контактам и адресу."""
    name__ilike: Optional[str] = Field(default=None, description="Фильтр по части названия.")

    class Constants(DefaultFilter.Constants):
        model = Supplier
        search_model_fields = ["name", "contact_info", "address"]
