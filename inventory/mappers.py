# inventory/mappers.py
"""
Явное преобразование таблиц в схемы ответа.

Каждая функция копирует поля по одному: наружу уходит ровно то, что
перечислено здесь (например, hashed_password пользователя не копируется).
Связи должны быть загружены заранее (selectinload в менеджерах).
"""
from typing import Optional

from .models import Category, Product, Supplier, Transaction, User
from .schemas.category import CategoryRead
from .schemas.product import ProductRead, ProductRef
from .schemas.supplier import SupplierRead
from .schemas.transaction import TransactionRead
from .schemas.user import UserRead, UserRef


def category_to_read(category: Optional[Category]) -> Optional[CategoryRead]:
    if category is None:
        return None
    return CategoryRead(
        id=category.id,
        name=category.name,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


def supplier_to_read(supplier: Optional[Supplier]) -> Optional[SupplierRead]:
    if supplier is None:
        return None
    return SupplierRead(
        id=supplier.id,
        name=supplier.name,
        contact_info=supplier.contact_info,
        address=supplier.address,
        created_at=supplier.created_at,
        updated_at=supplier.updated_at,
    )


def product_to_read(product: Product) -> ProductRead:
    return ProductRead(
        id=product.id,
        name=product.name,
        sku=product.sku,
        price=product.price,
        stock_quantity=product.stock_quantity,
        description=product.description,
        expiry_date=product.expiry_date,
        category_id=product.category_id,
        category=category_to_read(product.category),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def product_to_ref(product: Optional[Product]) -> Optional[ProductRef]:
    if product is None:
        return None
    return ProductRef(id=product.id, name=product.name, sku=product.sku, price=product.price)


def user_to_read(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        name=user.name,
        email=user.email,
        phone_number=user.phone_number,
        role=user.role,
        created_at=user.created_at,
    )


def user_to_ref(user: Optional[User]) -> Optional[UserRef]:
    if user is None:
        return None
    return UserRef(id=user.id, name=user.name, email=user.email)


def transaction_to_read(transaction: Transaction) -> TransactionRead:
    return TransactionRead(
        id=transaction.id,
        transaction_type=transaction.transaction_type,
        status=transaction.status,
        quantity=transaction.quantity,
        total_price=transaction.total_price,
        description=transaction.description,
        note=transaction.note,
        created_at=transaction.created_at,
        updated_at=transaction.updated_at,
        product=product_to_ref(transaction.product),
        supplier=supplier_to_read(transaction.supplier),
        user=user_to_ref(transaction.user),
    )
