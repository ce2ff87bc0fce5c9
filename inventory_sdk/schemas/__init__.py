# inventory_sdk/schemas/__init__.py

from . import token
from .identity import RequestIdentity
from .pagination import PaginatedResponse

__all__ = [
    "token",
    "RequestIdentity",
    "PaginatedResponse",
]
