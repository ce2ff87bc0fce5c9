# inventory/api/endpoints/auth.py
import logging
from datetime import timedelta
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from inventory_sdk.config import BaseAppSettings
from inventory_sdk.dependencies.auth import get_optional_identity
from inventory_sdk.exceptions import InvalidCredentialsError, TokenError
from inventory_sdk.schemas.identity import RequestIdentity
from inventory_sdk.schemas.token import Token
from inventory_sdk.security import create_access_token, create_refresh_token, decode_token

from ... import mappers
from ...models import User, UserRole
from ...schemas.user import LoginRequest, RefreshRequest, UserCreate, UserRead
from ..deps import Managers, get_managers, get_settings

logger = logging.getLogger("app.api.endpoints.auth")

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _issue_tokens(user: User, settings: BaseAppSettings, refresh_token: Optional[str] = None) -> Token:
    token_data = {"sub": user.email, "user_id": str(user.id), "role": user.role.value}
    access_token = create_access_token(
        data=token_data,
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    if refresh_token is None:
        refresh_token = create_refresh_token(
            data={"sub": user.email, "user_id": str(user.id)},
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expires_delta=timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES),
        )
    return Token(access_token=access_token, refresh_token=refresh_token)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    managers: Managers = Depends(get_managers),
    identity: Optional[RequestIdentity] = Depends(get_optional_identity),
) -> Any:
    """
    Регистрирует пользователя. Роль admin может назначить только администратор,
    остальные регистрируются как manager.
    """
    caller = await managers.users.get_for_identity(identity) if identity else None
    if data.role != UserRole.MANAGER and not (caller and caller.role == UserRole.ADMIN):
        logger.info(f"Role '{data.role.value}' requested by non-admin during registration of {data.email}; using manager.")
        data = data.model_copy(update={"role": UserRole.MANAGER})
    user = await managers.users.create(data)
    return mappers.user_to_read(user)


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginRequest,
    managers: Managers = Depends(get_managers),
    settings: BaseAppSettings = Depends(get_settings),
) -> Any:
    """Аутентифицирует пользователя по email и паролю и выдает access и refresh токены."""
    user = await managers.users.authenticate(email=credentials.email, password=credentials.password)
    if not user:
        logger.warning(f"Authentication failed for user: {credentials.email}.")
        raise InvalidCredentialsError("Incorrect email or password")
    logger.info(f"User {user.email} authenticated successfully. Generating tokens.")
    return _issue_tokens(user, settings)


@router.post("/refresh", response_model=Token)
async def refresh(
    body: RefreshRequest,
    managers: Managers = Depends(get_managers),
    settings: BaseAppSettings = Depends(get_settings),
) -> Any:
    """Обновляет access токен по действующему refresh токену."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate refresh token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(
            body.refresh_token,
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expected_type="refresh",
        )
    except TokenError as e:
        logger.warning(f"Refresh token rejected ({type(e).__name__})")
        raise credentials_exception from e

    user = await managers.users.get_for_identity(RequestIdentity(subject=payload.sub, user_id=payload.user_id))
    if user is None:
        logger.warning(f"User for refresh token subject '{payload.sub}' not found.")
        raise credentials_exception
    return _issue_tokens(user, settings, refresh_token=body.refresh_token)
