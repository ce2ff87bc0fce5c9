# inventory_sdk/middleware/auth.py
import logging
from typing import Any, Optional

from fastapi.security.utils import get_authorization_scheme_param
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from inventory_sdk.exceptions import TokenError
from inventory_sdk.schemas.identity import RequestIdentity
from inventory_sdk.security import ALGORITHM, decode_token

logger = logging.getLogger("inventory_sdk.middleware.auth")

# Ключ в scope, по которому видно, что гейт уже отработал для этого запроса
GATE_DONE_SCOPE_KEY = "auth_gate_done"


class AuthGateMiddleware(BaseHTTPMiddleware):
    """
    Однопроходный гейт аутентификации.

    Читает заголовок `Authorization: Bearer <token>`, проверяет подпись и срок
    действия токена и кладет RequestIdentity в request.scope["user"].
    Запрос никогда не прерывается: без токена или с невалидным токеном он идет
    дальше с user=None, а решение о 401/403 принимают зависимости эндпоинтов
    (`inventory_sdk.dependencies.auth`).
    """

    def __init__(
        self,
        app: Any,
        secret_key: str,
        algorithm: str = ALGORITHM,
    ):
        super().__init__(app)
        if not secret_key:
            raise ValueError("AuthGateMiddleware requires a non-empty secret_key.")
        self.secret_key = secret_key
        self.algorithm = algorithm
        logger.debug(f"AuthGateMiddleware initialized (algorithm={algorithm}).")

    def authenticate(self, authorization: Optional[str]) -> Optional[RequestIdentity]:
        """Возвращает RequestIdentity для валидного access токена, иначе None."""
        scheme, token = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != "bearer" or not token:
            return None

        try:
            payload = decode_token(
                token,
                secret_key=self.secret_key,
                algorithm=self.algorithm,
                expected_type="access",
            )
        except TokenError as e:
            logger.warning(f"AuthGate: token rejected ({type(e).__name__}: {e.message})")
            return None

        return RequestIdentity(
            subject=payload.sub,
            role=payload.role,
            user_id=payload.user_id,
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.scope.get(GATE_DONE_SCOPE_KEY):
            return await call_next(request)

        identity = self.authenticate(request.headers.get("Authorization"))
        request.scope["user"] = identity
        request.scope[GATE_DONE_SCOPE_KEY] = True

        if identity is not None:
            logger.debug(f"AuthGate: identity '{identity.subject}' attached for {request.url.path}")
        else:
            logger.debug(f"AuthGate: no identity for {request.url.path}")

        return await call_next(request)
