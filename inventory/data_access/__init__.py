# inventory/data_access/__init__.py
from .catalog_manager import CategoryDataAccessManager, ProductDataAccessManager, SupplierDataAccessManager
from .transaction_manager import TransactionDataAccessManager
from .user_manager import UserDataAccessManager

__all__ = [
    "CategoryDataAccessManager",
    "SupplierDataAccessManager",
    "ProductDataAccessManager",
    "UserDataAccessManager",
    "TransactionDataAccessManager",
]
