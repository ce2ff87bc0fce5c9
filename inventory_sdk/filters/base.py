# inventory_sdk/filters/base.py

import logging
from datetime import datetime
from typing import List, Optional, Type
from uuid import UUID

from fastapi_filter.contrib.sqlalchemy import Filter as BaseFilter
from pydantic import Field
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)


class DefaultFilter(BaseFilter):
    """
    Базовый фильтр со стандартными полями: ID, даты, сортировка и поиск.

    Наследники обязаны определить `Constants.model` и, при необходимости,
    `Constants.search_model_fields` для параметра `?search=`.
    Фильтрация и сортировка выполняются методами `.filter()` и `.sort()`
    базового класса `fastapi_filter.contrib.sqlalchemy.Filter`.
    """
    id__in: Optional[List[UUID]] = Field(
        default=None,
        title='Filter by ID list',
        description='Filter by a list of exact IDs.'
    )
    created_at__gte: Optional[datetime] = Field(
        default=None,
        title='Created at From',
        description='Filter by creation date (greater than or equal to).'
    )
    created_at__lt: Optional[datetime] = Field(
        default=None,
        title='Created at To',
        description='Filter by creation date (less than).'
    )
    updated_at__gte: Optional[datetime] = Field(
        default=None,
        title='Updated at From',
        description='Filter by update date (greater than or equal to).'
    )
    updated_at__lt: Optional[datetime] = Field(
        default=None,
        title='Updated at To',
        description='Filter by update date (less than).'
    )

    order_by: Optional[List[str]] = Field(
        default=None,
        title="Order by fields",
        description="Fields to order by. Prefix with '-' for descending order (e.g., 'name,-created_at')."
    )
    search: Optional[str] = Field(
        default=None,
        title="Search term",
        description="Case-insensitive text search across designated text fields."
    )

    class Constants(BaseFilter.Constants):
        model: Type[SQLModel]
