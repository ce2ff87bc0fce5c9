# inventory/schemas/supplier.py
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class SupplierBase(SQLModel):
    name: str = Field(min_length=1, max_length=255, description="Название поставщика.")
    contact_info: Optional[str] = Field(default=None, max_length=255, description="Контакты.")
    address: Optional[str] = Field(default=None, max_length=500, description="Адрес.")


class SupplierCreate(SupplierBase):
    pass


class SupplierUpdate(SQLModel):
    """Все поля опциональны."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    contact_info: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = Field(default=None, max_length=500)


class SupplierRead(SupplierBase):
    id: uuid.UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
