# inventory_sdk/data_access/__init__.py
from .base_manager import BaseDataAccessManager
from .local_manager import LocalDataAccessManager

__all__ = [
    "BaseDataAccessManager",
    "LocalDataAccessManager",
]
