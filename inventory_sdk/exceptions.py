# inventory_sdk/exceptions.py
from typing import Any, Dict, Optional


class InventorySDKError(Exception):
    """
    Базовый класс для всех пользовательских исключений inventory_sdk.
    Каждое исключение знает свой HTTP статус-код; перевод в HTTP ответ
    выполняет обработчик из `inventory_sdk.app_setup.register_exception_handlers`.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(InventorySDKError):
    """
    Ошибка конфигурации SDK или приложения
    (например, менеджеры не инициализированы в app.state).
    """

    def __str__(self) -> str:
        return f"Configuration Error: {self.message}"


class InvalidArgumentError(InventorySDKError):
    """Нарушение контракта вызывающей стороной (неверные параметры запроса, фильтра и т.п.)."""

    status_code = 400


class InvalidCredentialsError(InventorySDKError):
    """Неверный email или пароль при входе."""

    status_code = 401


class NotFoundError(InventorySDKError):
    """Запрошенная сущность не найдена."""

    status_code = 404


class ConflictError(InventorySDKError):
    """Нарушение уникальности (email, sku, имя категории и т.п.)."""

    status_code = 409


# --- Ошибки токенов ---
# Наружу через HTTP не пробрасываются: AuthGateMiddleware сводит их к "нет identity".


class TokenError(InventorySDKError):
    """Базовая ошибка проверки токена."""

    status_code = 401


class TokenMalformedError(TokenError):
    """Токен не является корректным JWT или payload не содержит обязательных claims."""

    pass


class TokenSignatureInvalidError(TokenError):
    """Подпись токена не прошла проверку."""

    pass


class TokenExpiredError(TokenError):
    """Срок действия токена истек."""

    pass
