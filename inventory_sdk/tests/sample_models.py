# inventory_sdk/tests/sample_models.py
# Таблица и схемы, на которых тестируются компоненты SDK
from typing import Optional

from pydantic import BaseModel as PydanticBaseModel, ConfigDict
from sqlalchemy import CheckConstraint
from sqlmodel import Field

from inventory_sdk.db import BaseModelWithMeta
from inventory_sdk.filters.base import DefaultFilter


class Item(BaseModelWithMeta, table=True):
    __tablename__ = "sdk_test_items"
    __table_args__ = (CheckConstraint("value >= 0", name="ck_sdk_test_items_value"),)

    name: str = Field(index=True, unique=True)
    description: Optional[str] = Field(default=None)
    value: Optional[int] = Field(default=None)


class ItemCreate(PydanticBaseModel):
    name: str
    description: Optional[str] = None
    value: Optional[int] = None


class ItemUpdate(PydanticBaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    value: Optional[int] = None
    model_config = ConfigDict(extra="allow")


class ItemFilter(DefaultFilter):
    name: Optional[str] = None
    name__ilike: Optional[str] = None
    value__gt: Optional[int] = None

    class Constants(DefaultFilter.Constants):
        model = Item
        search_model_fields = ["name", "description"]
