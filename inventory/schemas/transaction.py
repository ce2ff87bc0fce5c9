# inventory/schemas/transaction.py
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel

from ..models.enums import TransactionStatus, TransactionType
from .product import ProductRef
from .supplier import SupplierRead
from .user import UserRef


class TransactionRequest(SQLModel):
    """Запрос на закупку, продажу или возврат товара."""
    product_id: uuid.UUID = Field(description="ID товара.")
    quantity: int = Field(gt=0, description="Количество единиц (больше нуля).")
    supplier_id: Optional[uuid.UUID] = Field(
        default=None, description="ID поставщика (обязателен для закупки и возврата)."
    )
    description: Optional[str] = Field(default=None, max_length=1000)
    note: Optional[str] = Field(default=None, max_length=1000)


class TransactionStatusUpdate(SQLModel):
    status: TransactionStatus


class TransactionRead(SQLModel):
    id: uuid.UUID
    transaction_type: TransactionType
    status: TransactionStatus
    quantity: int
    total_price: Decimal
    description: Optional[str] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    product: Optional[ProductRef] = None
    supplier: Optional[SupplierRead] = None
    user: Optional[UserRef] = None
