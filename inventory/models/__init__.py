# inventory/models/__init__.py
# Импортируем все таблицы, чтобы SQLModel.metadata и связи были полными
from . import enums
from .category import Category, CategoryFilter
from .supplier import Supplier, SupplierFilter
from .product import Product, ProductFilter
from .user import User, UserFilter
from .transaction import Transaction
from .enums import TransactionStatus, TransactionType, UserRole

__all__ = [
    "enums",
    "Category",
    "CategoryFilter",
    "Supplier",
    "SupplierFilter",
    "Product",
    "ProductFilter",
    "User",
    "UserFilter",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "UserRole",
]
