# inventory_sdk/data_access/base_manager.py
import logging
from abc import ABC, abstractmethod
from typing import (
    Any,
    Dict,
    Generic,
    Mapping,
    Optional,
    Type,
    TypeVar,
    Union,
)
from uuid import UUID

from fastapi_filter.contrib.sqlalchemy import Filter as BaseSQLAlchemyFilter
from pydantic import BaseModel as PydanticBaseModel
from sqlmodel import SQLModel

logger = logging.getLogger("inventory_sdk.data_access.base_manager")

DM_SQLModelType = TypeVar("DM_SQLModelType", bound=SQLModel)
DM_CreateSchemaType = TypeVar("DM_CreateSchemaType", bound=PydanticBaseModel)
DM_UpdateSchemaType = TypeVar("DM_UpdateSchemaType", bound=PydanticBaseModel)


class BaseDataAccessManager(Generic[DM_SQLModelType, DM_CreateSchemaType, DM_UpdateSchemaType], ABC):
    """
    Интерфейс менеджера доступа к данным (DAM).

    Менеджеры не хранят состояния между запросами: сессия берется из
    контекста текущего запроса, поэтому один экземпляр создается при старте
    приложения и передается эндпоинтам явно.
    """
    model_cls: Type[DM_SQLModelType]
    create_schema_cls: Optional[Type[DM_CreateSchemaType]]
    update_schema_cls: Optional[Type[DM_UpdateSchemaType]]
    filter_cls: Optional[Type[BaseSQLAlchemyFilter]]

    model_name: str

    def __init__(
        self,
        model_name: str,
        model_cls: Type[DM_SQLModelType],
        create_schema_cls: Optional[Type[DM_CreateSchemaType]] = None,
        update_schema_cls: Optional[Type[DM_UpdateSchemaType]] = None,
        filter_cls: Optional[Type[BaseSQLAlchemyFilter]] = None,
    ):
        self.model_name = model_name
        self.model_cls = model_cls
        self.create_schema_cls = create_schema_cls
        self.update_schema_cls = update_schema_cls
        self.filter_cls = filter_cls
        logger.debug(f"{self.__class__.__name__} initialized for model '{model_name}' ({model_cls.__name__}).")

    @abstractmethod
    async def list(
        self,
        *,
        page: int = 0,
        size: int = 50,
        filters: Optional[Union[BaseSQLAlchemyFilter, Mapping[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """
        Возвращает страницу элементов.
        Словарь с ключами 'items', 'total', 'page', 'size'.
        """
        pass

    @abstractmethod
    async def get(self, item_id: UUID) -> Optional[DM_SQLModelType]:
        """Извлекает один элемент по ID."""
        pass

    @abstractmethod
    async def create(self, data: Union[DM_CreateSchemaType, Dict[str, Any]]) -> DM_SQLModelType:
        """Создает новый элемент."""
        pass

    @abstractmethod
    async def update(
        self, item_id: UUID, data: Union[DM_UpdateSchemaType, Dict[str, Any]]
    ) -> DM_SQLModelType:
        """Обновляет существующий элемент."""
        pass

    @abstractmethod
    async def delete(self, item_id: UUID) -> bool:
        """Удаляет элемент по ID."""
        pass
