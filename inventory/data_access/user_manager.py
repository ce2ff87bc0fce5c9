# inventory/data_access/user_manager.py
import logging
from typing import Any, Dict, Optional

from sqlmodel import func, select

from inventory_sdk.data_access import LocalDataAccessManager
from inventory_sdk.exceptions import ConfigurationError, ConflictError
from inventory_sdk.schemas.identity import RequestIdentity
from inventory_sdk.security import get_password_hash, verify_password

from ..models import User, UserFilter
from ..schemas.user import UserCreate, UserUpdate

logger = logging.getLogger("app.data_access.user_manager")


class UserDataAccessManager(LocalDataAccessManager[User, UserCreate, UserUpdate]):
    """
    Пользователи. Пароль хешируется при создании и смене,
    email хранится в нижнем регистре.
    """

    def __init__(self):
        super().__init__(
            model_name="User",
            model_cls=User,
            create_schema_cls=UserCreate,
            update_schema_cls=UserUpdate,
            filter_cls=UserFilter,
        )

    async def _prepare_for_create(self, validated_data: UserCreate) -> User:
        email = validated_data.email.lower()
        logger.debug(f"UserDataAccessManager: Preparing user for creation with email {email}.")
        if await self.get_by_email(email) is not None:
            raise ConflictError(f"User with email {email} already exists")
        try:
            hashed_password = get_password_hash(validated_data.password)
        except RuntimeError as e:
            raise ConfigurationError("Failed to process password.") from e

        user_data = validated_data.model_dump(exclude={"password", "email"})
        return self.model_cls(**user_data, email=email, hashed_password=hashed_password)

    async def _prepare_for_update(
        self, db_item: User, update_payload: Dict[str, Any]
    ) -> tuple[User, bool]:
        new_password = update_payload.pop("password", None)
        if update_payload.get("email"):
            update_payload["email"] = update_payload["email"].lower()

        db_item, updated = await super()._prepare_for_update(db_item, update_payload)

        if new_password:
            logger.info(f"UserDataAccessManager: New password provided for user {db_item.email}. Hashing and updating.")
            try:
                db_item.hashed_password = get_password_hash(new_password)
            except RuntimeError as e:
                raise ConfigurationError("Failed to process new password during update.") from e
            updated = True
        return db_item, updated

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(self.model_cls).where(func.lower(self.model_cls.email) == email.lower())
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        logger.info(f"UserDataAccessManager: Authenticating user {email}.")
        db_user = await self.get_by_email(email)
        if not db_user:
            return None
        if not verify_password(password, db_user.hashed_password):
            return None
        return db_user

    async def get_for_identity(self, identity: RequestIdentity) -> Optional[User]:
        """Пользователь, которому принадлежит identity (по user_id, иначе по email)."""
        if identity.user_id is not None:
            user = await self.get(identity.user_id)
            if user is not None:
                return user
        return await self.get_by_email(identity.subject)
