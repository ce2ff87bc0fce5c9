# inventory/api/endpoints/transactions.py
import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi_filter import FilterDepends

from inventory_sdk.schemas.pagination import PaginatedResponse

from ... import mappers
from ...filters.transaction import MAX_YEAR, MIN_YEAR, TransactionFilter
from ...models import User
from ...schemas.transaction import TransactionRead, TransactionRequest, TransactionStatusUpdate
from ..deps import Managers, PageParams, get_current_user, get_managers, get_page_params

logger = logging.getLogger("app.api.endpoints.transactions")

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("/purchase", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def purchase(
    data: TransactionRequest,
    current_user: User = Depends(get_current_user),
    managers: Managers = Depends(get_managers),
) -> Any:
    """Закупка товара у поставщика (supplier_id обязателен)."""
    transaction = await managers.transactions.purchase(data, user_id=current_user.id)
    return mappers.transaction_to_read(transaction)


@router.post("/sell", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def sell(
    data: TransactionRequest,
    current_user: User = Depends(get_current_user),
    managers: Managers = Depends(get_managers),
) -> Any:
    transaction = await managers.transactions.sell(data, user_id=current_user.id)
    return mappers.transaction_to_read(transaction)


@router.post("/return", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def return_to_supplier(
    data: TransactionRequest,
    current_user: User = Depends(get_current_user),
    managers: Managers = Depends(get_managers),
) -> Any:
    transaction = await managers.transactions.return_to_supplier(data, user_id=current_user.id)
    return mappers.transaction_to_read(transaction)


@router.get("", response_model=PaginatedResponse[TransactionRead])
async def list_transactions(
    filters: TransactionFilter = FilterDepends(TransactionFilter),
    paging: PageParams = Depends(get_page_params),
    current_user: User = Depends(get_current_user),
    managers: Managers = Depends(get_managers),
) -> Any:
    """
    Список транзакций.
    ?search= ищет по товару, поставщику и описанию; month и year задаются вместе.
    Если указан search, month и year не учитываются.
    """
    result = await managers.transactions.list(page=paging.page, size=paging.size, filters=filters)
    result["items"] = [mappers.transaction_to_read(t) for t in result["items"]]
    return result


@router.get("/by-month-year", response_model=PaginatedResponse[TransactionRead])
async def list_transactions_by_month_and_year(
    month: int = Query(..., description="Месяц (1-12)."),
    year: int = Query(..., description=f"Год ({MIN_YEAR}-{MAX_YEAR})."),
    paging: PageParams = Depends(get_page_params),
    current_user: User = Depends(get_current_user),
    managers: Managers = Depends(get_managers),
) -> Any:
    result = await managers.transactions.list_by_month_and_year(month, year, page=paging.page, size=paging.size)
    result["items"] = [mappers.transaction_to_read(t) for t in result["items"]]
    return result


@router.get("/{transaction_id}", response_model=TransactionRead)
async def get_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    managers: Managers = Depends(get_managers),
) -> Any:
    return mappers.transaction_to_read(await managers.transactions.get_or_404(transaction_id))


@router.put("/{transaction_id}/status", response_model=TransactionRead)
async def update_transaction_status(
    transaction_id: UUID,
    data: TransactionStatusUpdate,
    current_user: User = Depends(get_current_user),
    managers: Managers = Depends(get_managers),
) -> Any:
    logger.info(f"User {current_user.email} changes status of transaction {transaction_id} to {data.status.value}")
    transaction = await managers.transactions.update_status(transaction_id, data.status)
    return mappers.transaction_to_read(transaction)
