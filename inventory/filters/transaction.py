# inventory/filters/transaction.py
"""
Построение предикатов для выборки транзакций.

Предикат - булево SQL-выражение SQLAlchemy (ColumnElement[bool]). Он не
зависит от конкретного запроса: связи с товаром и поставщиком проверяются
через EXISTS (`relationship.has()`), поэтому его можно подставить в любой
`select(Transaction)` и комбинировать через and_/or_.

На один запрос действует ровно один режим: поиск по тексту или месяц+год.
Если заданы оба, текст имеет приоритет.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi_filter.contrib.sqlalchemy import Filter as BaseSQLAlchemyFilter
from pydantic import Field
from sqlalchemy import and_, or_, true
from sqlalchemy.sql import ColumnElement

from inventory_sdk.exceptions import InvalidArgumentError
from inventory_sdk.filters.base import DefaultFilter

from ..models import Product, Supplier, Transaction, TransactionStatus, TransactionType

logger = logging.getLogger("app.filters.transaction")

Predicate = ColumnElement[bool]

MIN_YEAR = 1
MAX_YEAR = 9999


LIKE_ESCAPE = "/"


def _like_pattern(term: str) -> str:
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _icontains(column, term: str) -> Predicate:
    # Регистр приводится на стороне БД для обеих частей (ILIKE или lower() LIKE lower()),
    # '%' и '_' в term ищутся буквально
    return column.ilike(_like_pattern(term), escape=LIKE_ESCAPE)


def by_free_text(term: Optional[str]) -> Predicate:
    """
    Регистронезависимый поиск подстроки в названии товара, названии
    поставщика или описании транзакции (достаточно совпадения в любом поле).
    Пустой term дает тождественно истинный предикат.
    """
    if not term:
        return true()
    return or_(
        Transaction.product.has(_icontains(Product.name, term)),
        Transaction.supplier.has(_icontains(Supplier.name, term)),
        _icontains(Transaction.description, term),
    )


def by_month_and_year(month: int, year: int) -> Predicate:
    """
    Транзакции, созданные в указанном календарном месяце и году (UTC).
    День и время не учитываются.

    Месяц задается полуоткрытым интервалом [начало месяца, начало следующего)
    с границами в UTC, поэтому результат не зависит от часового пояса сессии БД.

    :raises InvalidArgumentError: month вне 1..12 или year вне 1..9999.
    """
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidArgumentError(
            f"Month must be an integer between 1 and 12, got {month!r}",
            details={"month": month},
        )
    if isinstance(year, bool) or not isinstance(year, int) or not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidArgumentError(
            f"Year must be an integer between {MIN_YEAR} and {MAX_YEAR}, got {year!r}",
            details={"year": year},
        )
    period_start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12 and year == MAX_YEAR:
        # Следующего месяца datetime не представляет
        return Transaction.created_at >= period_start
    if month == 12:
        period_end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        period_end = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return and_(
        Transaction.created_at >= period_start,
        Transaction.created_at < period_end,
    )


def build_transaction_predicate(
    search: Optional[str] = None,
    month: Optional[int] = None,
    year: Optional[int] = None,
) -> Predicate:
    """
    Выбирает режим фильтрации по заданным критериям.

    * непустой search -> by_free_text (month/year игнорируются);
    * month и year -> by_month_and_year;
    * ничего -> все транзакции.

    :raises InvalidArgumentError: задан только month или только year.
    """
    if search:
        if month is not None or year is not None:
            logger.debug("Both free text and month/year supplied; free text takes precedence.")
        return by_free_text(search)
    if month is None and year is None:
        return true()
    if month is None or year is None:
        raise InvalidArgumentError("Month and year must be supplied together")
    return by_month_and_year(month, year)


class TransactionFilter(DefaultFilter):
    """
    Фильтр списка транзакций (query-параметры GET /transactions).
    search, month и year обрабатываются build_transaction_predicate,
    остальные поля - стандартной логикой fastapi-filter.
    """
    month: Optional[int] = Field(default=None, description="Месяц создания (1-12), вместе с year.")
    year: Optional[int] = Field(default=None, description="Год создания, вместе с month.")
    transaction_type: Optional[TransactionType] = Field(default=None, description="Тип транзакции.")
    status: Optional[TransactionStatus] = Field(default=None, description="Статус транзакции.")
    order_by: Optional[List[str]] = Field(
        default=["-created_at"],
        description="Fields to order by. Prefix with '-' for descending order.",
    )

    class Constants(DefaultFilter.Constants):
        model = Transaction

    def predicate(self) -> Predicate:
        return build_transaction_predicate(search=self.search, month=self.month, year=self.year)

    def filter(self, query):
        query = query.where(self.predicate())
        # Остальные поля отдаем базовой реализации, без полей построителя
        remaining = self.model_copy(update={"search": None, "month": None, "year": None})
        return BaseSQLAlchemyFilter.filter(remaining, query)
