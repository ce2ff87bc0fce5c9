# inventory_sdk/security.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Literal, Optional

from jose import jwt, JWTError, ExpiredSignatureError
from jose.exceptions import JWTClaimsError
from passlib.context import CryptContext
from pydantic import ValidationError

from inventory_sdk.exceptions import (
    TokenExpiredError,
    TokenMalformedError,
    TokenSignatureInvalidError,
)
from inventory_sdk.schemas.token import TokenPayload

logger = logging.getLogger(__name__)

# --- Password Hashing ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Проверяет, соответствует ли пароль в открытом виде хешу.

    :param plain_password: Пароль в открытом виде.
    :param hashed_password: Хеш для сравнения.
    :return: True, если пароли совпадают, иначе False.
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        # Хеш в неверном формате
        logger.error(f"Error verifying password (invalid hash format?): {e}")
        return False


def get_password_hash(password: str) -> str:
    """
    Возвращает bcrypt-хеш пароля.

    :raises RuntimeError: Если хеширование не удалось.
    """
    if not password:
        logger.warning("Attempting to hash an empty password.")
    try:
        return pwd_context.hash(password)
    except Exception as e:
        logger.exception("Error generating password hash.")
        raise RuntimeError("Failed to hash password") from e


# --- JWT Token Handling ---
ALGORITHM = "HS256"

TokenType = Literal["access", "refresh"]


def _create_token(
    data: Dict[str, Any],
    secret_key: str,
    algorithm: str,
    expires_delta: timedelta,
    token_type: TokenType,
) -> str:
    if not secret_key:
        logger.error(f"Cannot create {token_type} token: secret_key is missing.")
        raise ValueError(f"Secret key must be provided to create {token_type} token.")
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire, "type": token_type})
    try:
        return jwt.encode(to_encode, secret_key, algorithm=algorithm)
    except Exception as e:
        logger.exception(f"Error encoding {token_type} token.")
        raise RuntimeError(f"Failed to create {token_type} token") from e


def create_access_token(
    *,
    data: Dict[str, Any],
    secret_key: str,
    algorithm: str = ALGORITHM,
    expires_delta: timedelta,
) -> str:
    """
    Создает JWT access токен.

    :param data: Claims токена (sub, user_id, role).
    :param secret_key: Секретный ключ для подписи.
    :param algorithm: Алгоритм подписи (по умолчанию HS256).
    :param expires_delta: Время жизни токена.
    :raises ValueError: Если не предоставлен secret_key.
    """
    return _create_token(data, secret_key, algorithm, expires_delta, "access")


def create_refresh_token(
    *,
    data: Dict[str, Any],
    secret_key: str,
    algorithm: str = ALGORITHM,
    expires_delta: timedelta,
) -> str:
    """Создает JWT refresh токен. Параметры те же, что у create_access_token."""
    return _create_token(data, secret_key, algorithm, expires_delta, "refresh")


def decode_token(
    token: str,
    secret_key: str,
    algorithm: str = ALGORITHM,
    expected_type: Optional[TokenType] = "access",
) -> TokenPayload:
    """
    Проверяет подпись и срок действия JWT и возвращает его payload.

    Только вычисления в памяти, без обращений к БД.

    :param token: Строка JWT.
    :param secret_key: Секретный ключ для проверки подписи.
    :param algorithm: Алгоритм подписи.
    :param expected_type: Ожидаемый claim `type` (None - не проверять).
    :raises ValueError: Если не предоставлен secret_key (ошибка конфигурации).
    :raises TokenMalformedError: Токен не разбирается, в нем нет exp или других обязательных claims.
    :raises TokenSignatureInvalidError: Подпись не совпадает.
    :raises TokenExpiredError: Срок действия истек.
    """
    if not secret_key:
        logger.error("Cannot verify token: secret_key is missing.")
        raise ValueError("Secret key must be provided to verify token.")
    if not token:
        raise TokenMalformedError("Empty token")

    # Сначала убеждаемся, что это вообще JWT: иначе мусор попадет в "неверную подпись"
    try:
        unverified_claims = jwt.get_unverified_claims(token)
    except JWTError as e:
        raise TokenMalformedError("Token could not be decoded") from e
    # Токен без срока действия не принимается
    if "exp" not in unverified_claims:
        raise TokenMalformedError("Token has no expiration claim")

    try:
        raw_payload = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
            options={"require_exp": True},
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except JWTClaimsError as e:
        raise TokenMalformedError(f"Invalid token claims: {e}") from e
    except JWTError as e:
        raise TokenSignatureInvalidError("Token signature verification failed") from e

    try:
        payload = TokenPayload.model_validate(raw_payload)
    except ValidationError as e:
        raise TokenMalformedError("Token payload is missing required claims") from e

    if expected_type is not None and payload.type != expected_type:
        raise TokenMalformedError(
            f"Unexpected token type '{payload.type}', expected '{expected_type}'"
        )
    return payload
