# inventory_sdk/data_access/local_manager.py
import logging
from typing import (
    Any,
    ClassVar,
    Dict,
    FrozenSet,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    Union,
)
from uuid import UUID

from fastapi_filter.contrib.sqlalchemy import Filter as BaseSQLAlchemyFilter
from pydantic import BaseModel as PydanticBaseModel, ValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement, Select
from sqlmodel import col, select

from inventory_sdk.db.base_model import utcnow
from inventory_sdk.db.session import get_current_session
from inventory_sdk.exceptions import (
    ConfigurationError,
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from .base_manager import (
    BaseDataAccessManager,
    DM_CreateSchemaType,
    DM_SQLModelType,
    DM_UpdateSchemaType,
)

logger = logging.getLogger("inventory_sdk.data_access.local_manager")


class LocalDataAccessManager(BaseDataAccessManager[DM_SQLModelType, DM_CreateSchemaType, DM_UpdateSchemaType]):
    """
    DAM поверх локальной БД (SQLModel + AsyncSession из контекста запроса).
    Ошибки сообщаются исключениями из inventory_sdk.exceptions.
    """

    # Поля, которые нельзя менять через update()
    protected_fields: ClassVar[FrozenSet[str]] = frozenset({"id", "created_at", "updated_at"})

    @property
    def session(self) -> AsyncSession:
        return get_current_session()

    def load_options(self) -> Sequence[Any]:
        """Опции загрузки связей (selectinload и т.п.) для get/list."""
        return ()

    def default_order_by(self) -> List[Any]:
        order: List[Any] = []
        if hasattr(self.model_cls, "created_at"):
            order.append(col(self.model_cls.created_at).desc())  # type: ignore[attr-defined]
        order.append(col(self.model_cls.id).asc())  # type: ignore[attr-defined]
        return order

    # --- Чтение ---

    async def get(self, item_id: UUID) -> Optional[DM_SQLModelType]:
        logger.debug(f"Local DAM GET: {self.model_name} ID: {item_id}")
        return await self.session.get(
            self.model_cls,
            item_id,
            options=list(self.load_options()),
            populate_existing=True,
        )

    async def get_or_404(self, item_id: UUID) -> DM_SQLModelType:
        db_item = await self.get(item_id)
        if db_item is None:
            raise NotFoundError(f"{self.model_name} with id {item_id} not found")
        return db_item

    def _build_filter(
        self, filters: Optional[Union[BaseSQLAlchemyFilter, Mapping[str, Any]]]
    ) -> Optional[BaseSQLAlchemyFilter]:
        if filters is None:
            return None
        if isinstance(filters, BaseSQLAlchemyFilter):
            return filters
        if isinstance(filters, Mapping):
            if self.filter_cls is None:
                raise ConfigurationError(f"Filter class is not configured for {self.model_name}.")
            try:
                return self.filter_cls(**filters)
            except ValidationError as ve:
                raise InvalidArgumentError(
                    f"Invalid filter parameters for {self.model_name}",
                    details={"errors": ve.errors(include_url=False, include_context=False)},
                ) from ve
        raise TypeError(f"Unsupported filter type: {type(filters)}.")

    async def paginate(self, statement: Select, *, page: int, size: int) -> Dict[str, Any]:
        """
        Выполняет запрос постранично. Страницы нумеруются с нуля.
        Возвращает {'items', 'total', 'page', 'size'}.
        """
        if page < 0:
            raise InvalidArgumentError("Page number must be greater than or equal to 0")
        if size <= 0:
            raise InvalidArgumentError("Page size must be greater than 0")

        session = self.session
        count_statement = select(func.count()).select_from(statement.order_by(None).subquery())
        total = (await session.execute(count_statement)).scalar_one()

        page_statement = statement.offset(page * size).limit(size)
        options = list(self.load_options())
        if options:
            page_statement = page_statement.options(*options)
        result = await session.execute(page_statement)
        items = list(result.scalars().all())
        logger.debug(f"Local DAM PAGE: {self.model_name} page={page} size={size} -> {len(items)}/{total}")
        return {"items": items, "total": total, "page": page, "size": size}

    async def list(
        self,
        *,
        page: int = 0,
        size: int = 50,
        filters: Optional[Union[BaseSQLAlchemyFilter, Mapping[str, Any]]] = None,
    ) -> Dict[str, Any]:
        logger.debug(f"Local DAM LIST: {self.model_name}, page={page}, size={size}, filters={type(filters).__name__}")
        statement = select(self.model_cls)
        filter_obj = self._build_filter(filters)
        if filter_obj is not None:
            statement = filter_obj.filter(statement)
            statement = filter_obj.sort(statement)
        statement = statement.order_by(*self.default_order_by())
        return await self.paginate(statement, page=page, size=size)

    async def search(
        self,
        predicate: ColumnElement[bool],
        *,
        page: int = 0,
        size: int = 50,
        order_by: Optional[Sequence[Any]] = None,
    ) -> Dict[str, Any]:
        """
        Страница записей, удовлетворяющих готовому предикату.
        Без order_by используется default_order_by().
        """
        ordering = list(order_by) if order_by else self.default_order_by()
        statement = select(self.model_cls).where(predicate).order_by(*ordering)
        return await self.paginate(statement, page=page, size=size)

    # --- Запись ---

    def _validate(self, data: Any, schema_cls: Optional[Type[PydanticBaseModel]], context: str) -> PydanticBaseModel:
        if isinstance(data, dict):
            if schema_cls is None:
                raise ConfigurationError(f"{context} schema not defined for {self.model_name}, cannot validate dict.")
            try:
                return schema_cls.model_validate(data)
            except ValidationError as ve:
                raise InvalidArgumentError(
                    f"Invalid {context.lower()} data for {self.model_name}",
                    details={"errors": ve.errors(include_url=False, include_context=False)},
                ) from ve
        if isinstance(data, PydanticBaseModel):
            return data
        raise TypeError(f"Unsupported data type for {context.lower()} {self.model_name}: {type(data)}.")

    async def create(self, data: Union[DM_CreateSchemaType, Dict[str, Any]]) -> DM_SQLModelType:
        logger.debug(f"Local DAM CREATE: {self.model_name}")
        validated_data = self._validate(data, self.create_schema_cls, "Create")
        db_item = await self._prepare_for_create(validated_data)  # type: ignore[arg-type]
        session = self.session
        session.add(db_item)
        await self._commit(context="create")
        logger.info(f"Created {self.model_name} with ID {db_item.id}")  # type: ignore[attr-defined]
        return await self.get_or_404(db_item.id)  # type: ignore[attr-defined]

    async def update(
        self, item_id: UUID, data: Union[DM_UpdateSchemaType, Dict[str, Any]]
    ) -> DM_SQLModelType:
        logger.debug(f"Local DAM UPDATE: {self.model_name} ID: {item_id}")
        db_item = await self.get_or_404(item_id)
        validated_data = self._validate(data, self.update_schema_cls, "Update")
        update_payload = validated_data.model_dump(exclude_unset=True)
        if not update_payload:
            logger.info(f"No fields to update for {self.model_name} {item_id}.")
            return db_item

        db_item, updated = await self._prepare_for_update(db_item, update_payload)
        if not updated:
            return db_item

        self.session.add(db_item)
        await self._commit(context="update")
        logger.info(f"Updated {self.model_name} {item_id}")
        return await self.get_or_404(item_id)

    async def delete(self, item_id: UUID) -> bool:
        logger.debug(f"Local DAM DELETE: {self.model_name} ID: {item_id}")
        db_item = await self.get_or_404(item_id)
        await self._prepare_for_delete(db_item)
        await self.session.delete(db_item)
        await self._commit(context="delete")
        logger.info(f"Deleted {self.model_name} {item_id}")
        return True

    # --- Хуки для наследников ---

    async def _prepare_for_create(self, validated_data: DM_CreateSchemaType) -> DM_SQLModelType:
        return self.model_cls(**validated_data.model_dump())

    async def _prepare_for_update(
        self, db_item: DM_SQLModelType, update_payload: Dict[str, Any]
    ) -> tuple[DM_SQLModelType, bool]:
        updated = False
        for key, value in update_payload.items():
            if key in self.protected_fields:
                logger.warning(f"Attempt to change protected field '{key}' on {self.model_name} ignored.")
                continue
            if not hasattr(db_item, key):
                logger.warning(f"Attribute '{key}' not found on model {self.model_cls.__name__}.")
                continue
            if getattr(db_item, key) != value:
                setattr(db_item, key, value)
                updated = True
        if updated and hasattr(db_item, "updated_at"):
            setattr(db_item, "updated_at", utcnow())
        return db_item, updated

    async def _prepare_for_delete(self, db_item: DM_SQLModelType) -> None:
        pass

    async def _commit(self, context: str) -> None:
        session = self.session
        try:
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            self._handle_integrity_error(e, context=context)

    def _handle_integrity_error(self, error: IntegrityError, context: str = "operation") -> None:
        message = str(getattr(error, "orig", None) or error).lower()
        logger.warning(f"IntegrityError during {context} for {self.model_name}: {message}")
        if "unique" in message or "duplicate key" in message:
            raise ConflictError(f"Conflict: {self.model_name} with the same unique value already exists.") from error
        if "foreign key" in message:
            raise InvalidArgumentError(f"Related entity for {self.model_name} not found or still referenced.") from error
        if "not null" in message or "not-null" in message:
            raise InvalidArgumentError(f"Required field of {self.model_name} cannot be null.") from error
        if "check constraint" in message:
            raise InvalidArgumentError(f"Value for {self.model_name} violates a check constraint.") from error
        raise InvalidArgumentError(f"Database integrity error during {context} of {self.model_name}.") from error
