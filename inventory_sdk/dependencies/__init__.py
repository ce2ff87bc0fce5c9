from .auth import get_current_identity, get_optional_identity, require_role

__all__ = ["get_current_identity", "get_optional_identity", "require_role"]
