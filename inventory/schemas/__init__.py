# inventory/schemas/__init__.py
from . import category, product, supplier, transaction, user

__all__ = ["category", "product", "supplier", "transaction", "user"]
