from .base import DefaultFilter

__all__ = ["DefaultFilter"]
