# inventory/tests/test_transaction_filters.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List

import pytest
import pytest_asyncio
from sqlalchemy import and_, true
from sqlalchemy.dialects import postgresql
from sqlmodel import select

from inventory_sdk.db.session import managed_session
from inventory_sdk.exceptions import InvalidArgumentError

from inventory.data_access import TransactionDataAccessManager
from inventory.filters.transaction import (
    TransactionFilter,
    build_transaction_predicate,
    by_free_text,
    by_month_and_year,
)
from inventory.models import Product, Transaction, TransactionType
from inventory.tests.conftest import add_rows, at, make_transaction


async def matching_descriptions(predicate) -> List[str]:
    async with managed_session():
        result = await TransactionDataAccessManager().search(predicate, page=0, size=100)
    return sorted(t.description or "" for t in result["items"])


@pytest_asyncio.fixture
async def seeded(catalog: Dict[str, object]) -> List[Transaction]:
    """Набор транзакций с разными товарами, поставщиками и датами."""
    laptop, mouse = catalog["laptop"], catalog["mouse"]
    acme, globex = catalog["acme"], catalog["globex"]
    rows = [
        make_transaction(laptop, at(2024, 3, 1, 0), acme, "march start laptop"),
        make_transaction(laptop, at(2024, 3, 31, 23), globex, "march end"),
        make_transaction(mouse, at(2024, 4, 1, 0), acme, "april first"),
        make_transaction(mouse, at(2023, 3, 10), None, "old sale", TransactionType.SALE),
        make_transaction(mouse, at(2024, 2, 29), globex, "Discount 50%_off"),
    ]
    await add_rows(*rows)
    return rows


# --- Построение предикатов без БД ---

def test_empty_free_text_is_identity():
    assert str(by_free_text("")) == str(true())
    assert str(by_free_text(None)) == str(true())


def test_nothing_supplied_is_identity():
    assert str(build_transaction_predicate()) == str(true())


@pytest.mark.parametrize("month", [0, 13, -1, 100])
def test_month_out_of_range(month: int):
    with pytest.raises(InvalidArgumentError) as exc_info:
        by_month_and_year(month, 2024)
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("year", [0, -5, 10000])
def test_year_out_of_range(year: int):
    with pytest.raises(InvalidArgumentError):
        by_month_and_year(3, year)


@pytest.mark.parametrize("month,year", [("3", 2024), (3.0, 2024), (True, 2024), (3, None)])
def test_month_and_year_must_be_integers(month, year):
    with pytest.raises(InvalidArgumentError):
        by_month_and_year(month, year)


@pytest.mark.parametrize("month,year", [(3, None), (None, 2024)])
def test_month_and_year_must_come_together(month, year):
    with pytest.raises(InvalidArgumentError, match="together"):
        build_transaction_predicate(month=month, year=year)


def test_free_text_takes_precedence_over_month():
    # Некорректный месяц не проверяется, если задан поиск по тексту
    predicate = build_transaction_predicate(search="laptop", month=13, year=2024)
    assert str(predicate) == str(by_free_text("laptop"))


def test_predicates_compose_with_and():
    combined = and_(by_free_text("laptop"), by_month_and_year(3, 2024))
    sql = str(select(Transaction).where(combined))
    assert "EXISTS" in sql
    assert "AND" in sql


def test_transaction_filter_routes_builder_fields():
    query = TransactionFilter(search="laptop", transaction_type=TransactionType.SALE).filter(select(Transaction))
    sql = str(query)
    assert "EXISTS" in sql
    assert "transactions.transaction_type" in sql


def test_transaction_filter_rejects_partial_period():
    with pytest.raises(InvalidArgumentError):
        TransactionFilter(month=3).filter(select(Transaction))


# --- Сценарии на БД ---

@pytest.mark.asyncio
async def test_free_text_matches_product_name(seeded):
    assert await matching_descriptions(by_free_text("laptop")) == ["march end", "march start laptop"]


@pytest.mark.asyncio
async def test_free_text_is_case_insensitive(seeded):
    assert await matching_descriptions(by_free_text("LAPTOP")) == await matching_descriptions(by_free_text("laptop"))


@pytest.mark.asyncio
async def test_free_text_matches_supplier_name(seeded):
    assert await matching_descriptions(by_free_text("acme")) == ["april first", "march start laptop"]


@pytest.mark.asyncio
async def test_free_text_matches_description(seeded):
    assert await matching_descriptions(by_free_text("old")) == ["old sale"]


@pytest.mark.asyncio
async def test_free_text_without_supplier_still_matches_product(seeded):
    assert "old sale" in await matching_descriptions(by_free_text("wireless"))


@pytest.mark.asyncio
async def test_free_text_wildcards_are_literal(seeded):
    assert await matching_descriptions(by_free_text("50%_")) == ["Discount 50%_off"]
    assert await matching_descriptions(by_free_text("%")) == ["Discount 50%_off"]


@pytest.mark.asyncio
async def test_free_text_no_match(seeded):
    assert await matching_descriptions(by_free_text("zzz-nothing")) == []


@pytest.mark.asyncio
async def test_empty_free_text_matches_everything(seeded):
    assert len(await matching_descriptions(by_free_text(""))) == len(seeded)


@pytest.mark.asyncio
async def test_month_and_year_boundaries(seeded):
    # 1 марта 00:00 и 31 марта 23:00 входят, 1 апреля и март 2023 нет
    assert await matching_descriptions(by_month_and_year(3, 2024)) == ["march end", "march start laptop"]


@pytest.mark.asyncio
async def test_month_and_year_leap_day(seeded):
    assert await matching_descriptions(by_month_and_year(2, 2024)) == ["Discount 50%_off"]


@pytest.mark.asyncio
async def test_month_and_year_no_transactions(seeded):
    assert await matching_descriptions(by_month_and_year(12, 1999)) == []


@pytest.mark.asyncio
async def test_combined_predicate_is_intersection(seeded):
    combined = and_(by_free_text("laptop"), by_month_and_year(3, 2024))
    text_only = set(await matching_descriptions(by_free_text("laptop")))
    period_only = set(await matching_descriptions(by_month_and_year(3, 2024)))
    assert set(await matching_descriptions(combined)) == text_only & period_only


@pytest.mark.asyncio
async def test_search_paging(seeded):
    async with managed_session():
        manager = TransactionDataAccessManager()
        first = await manager.search(by_free_text(""), page=0, size=2)
        last = await manager.search(by_free_text(""), page=2, size=2)
    assert first["total"] == len(seeded)
    assert len(first["items"]) == 2
    assert len(last["items"]) == 1
    # Связи загружены заранее
    assert first["items"][0].product is not None


@pytest.mark.asyncio
async def test_free_text_matches_non_ascii_text(catalog):
    keyboard = Product(name="Клавиатура беспроводная", sku="KBD-RU", price=Decimal("40.00"))
    await add_rows(keyboard)
    await add_rows(
        make_transaction(catalog["laptop"], at(2022, 6, 1), catalog["acme"], "Поставка Ноутбук"),
        make_transaction(keyboard, at(2022, 6, 2), None, "keyboard sale", TransactionType.SALE),
    )
    assert await matching_descriptions(by_free_text("Ноутбук")) == ["Поставка Ноутбук"]
    assert await matching_descriptions(by_free_text("ставка Ноут")) == ["Поставка Ноутбук"]
    assert await matching_descriptions(by_free_text("Клавиатура")) == ["keyboard sale"]


# --- Границы месяца в UTC ---

def test_month_bounds_are_utc():
    params = by_month_and_year(3, 2024).compile().params
    assert sorted(params.values()) == [
        datetime(2024, 3, 1, tzinfo=timezone.utc),
        datetime(2024, 4, 1, tzinfo=timezone.utc),
    ]


def test_month_filter_does_not_depend_on_session_timezone():
    sql = str(by_month_and_year(3, 2024).compile(dialect=postgresql.dialect()))
    assert "EXTRACT" not in sql.upper()
    assert "transactions.created_at >=" in sql
    assert "transactions.created_at <" in sql


def test_december_rolls_over_to_next_year():
    params = by_month_and_year(12, 2023).compile().params
    assert max(params.values()) == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_last_representable_month_has_open_upper_bound():
    params = by_month_and_year(12, 9999).compile().params
    assert list(params.values()) == [datetime(9999, 12, 1, tzinfo=timezone.utc)]


@pytest.mark.asyncio
async def test_december_boundaries(catalog):
    laptop = catalog["laptop"]
    await add_rows(
        make_transaction(laptop, at(2023, 12, 31, 23), None, "new year eve"),
        make_transaction(laptop, at(2024, 1, 1, 0), None, "new year"),
        make_transaction(laptop, at(2023, 11, 30, 23), None, "november"),
    )
    assert await matching_descriptions(by_month_and_year(12, 2023)) == ["new year eve"]
    assert await matching_descriptions(by_month_and_year(1, 2024)) == ["new year"]
