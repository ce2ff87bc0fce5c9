# inventory/schemas/category.py
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class CategoryCreate(SQLModel):
    name: str = Field(min_length=1, max_length=255, description="Название категории.")


class CategoryUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255, description="Новое название.")


class CategoryRead(SQLModel):
    id: uuid.UUID
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
