# inventory/models/transaction.py
import uuid
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from sqlalchemy import CheckConstraint, Numeric
from sqlmodel import Field, Relationship

from inventory_sdk.db import BaseModelWithMeta

from .enums import TransactionStatus, TransactionType

if TYPE_CHECKING:
    from .product import Product
    from .supplier import Supplier
    from .user import User


class Transaction(BaseModelWithMeta, table=True):
    """
    Движение товара: закупка у поставщика, продажа или возврат поставщику.
    created_at фиксируется при создании и по нему работает фильтр по месяцу/году.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_transactions_quantity_non_negative"),
    )

    transaction_type: TransactionType = Field(index=True, description="Тип транзакции.")
    status: TransactionStatus = Field(
        default=TransactionStatus.COMPLETED,
        index=True,
        description="Статус транзакции.",
    )
    quantity: int = Field(description="Количество единиц товара.")
    total_price: Decimal = Field(
        default=Decimal("0"),
        sa_type=Numeric(14, 2),
        description="Итоговая сумма.",
    )
    description: Optional[str] = Field(default=None, max_length=1000, description="Описание.")
    note: Optional[str] = Field(default=None, max_length=1000, description="Заметка.")

    product_id: uuid.UUID = Field(foreign_key="products.id", index=True, description="Товар.")
    supplier_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="suppliers.id",
        index=True,
        description="Поставщик (для закупок и возвратов).",
    )
    user_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="users.id",
        index=True,
        description="Пользователь, оформивший транзакцию.",
    )

    product: Optional["Product"] = Relationship()
    supplier: Optional["Supplier"] = Relationship()
    user: Optional["User"] = Relationship()
