# inventory_sdk/schemas/pagination.py

from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

DataType = TypeVar("DataType")


class PaginatedResponse(BaseModel, Generic[DataType]):
    """
    Стандартная схема ответа для постраничных списков.
    Страницы нумеруются с нуля.
    """

    items: List[DataType] = Field(..., description="Элементы текущей страницы.")
    total: int = Field(..., description="Общее количество записей, подходящих под фильтр.")
    page: int = Field(..., description="Номер страницы (с 0).")
    size: int = Field(..., description="Размер страницы, использованный для запроса.")

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return (self.total + self.size - 1) // self.size
