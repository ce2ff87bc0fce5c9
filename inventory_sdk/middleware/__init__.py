from .auth import AuthGateMiddleware
from .middleware import DBSessionMiddleware

__all__ = ["AuthGateMiddleware", "DBSessionMiddleware"]
