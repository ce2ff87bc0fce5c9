# inventory/data_access/transaction_manager.py
import logging
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import selectinload

from inventory_sdk.data_access import LocalDataAccessManager
from inventory_sdk.db.base_model import utcnow
from inventory_sdk.exceptions import InvalidArgumentError, NotFoundError

from ..filters.transaction import TransactionFilter, by_month_and_year
from ..models import Product, Supplier, Transaction, TransactionStatus, TransactionType
from ..schemas.transaction import TransactionRequest

logger = logging.getLogger("app.data_access.transaction_manager")


class TransactionDataAccessManager(LocalDataAccessManager[Transaction, TransactionRequest, TransactionRequest]):
    """
    Транзакции движения товара.

    Закупка, продажа и возврат меняют остаток товара и создают запись
    транзакции в одном коммите. Произвольное создание и правка через
    create()/update() не используются: только операции ниже.
    """

    def __init__(self):
        super().__init__(
            model_name="Transaction",
            model_cls=Transaction,
            filter_cls=TransactionFilter,
        )

    def load_options(self) -> Sequence[Any]:
        return (
            selectinload(Transaction.product),  # type: ignore[arg-type]
            selectinload(Transaction.supplier),  # type: ignore[arg-type]
            selectinload(Transaction.user),  # type: ignore[arg-type]
        )

    # --- Вспомогательное ---

    async def _get_product_for_update(self, product_id: UUID) -> Product:
        product = await self.session.get(Product, product_id, with_for_update=True)
        if product is None:
            raise NotFoundError(f"Product with id {product_id} not found")
        return product

    async def _get_supplier(self, supplier_id: Optional[UUID], required: bool) -> Optional[Supplier]:
        if supplier_id is None:
            if required:
                raise InvalidArgumentError("Supplier id is required for this transaction type")
            return None
        supplier = await self.session.get(Supplier, supplier_id)
        if supplier is None:
            raise NotFoundError(f"Supplier with id {supplier_id} not found")
        return supplier

    async def _record(
        self,
        transaction_type: TransactionType,
        request: TransactionRequest,
        product: Product,
        supplier: Optional[Supplier],
        user_id: Optional[UUID],
    ) -> Transaction:
        total_price = Decimal(product.price) * request.quantity
        db_item = Transaction(
            transaction_type=transaction_type,
            status=TransactionStatus.COMPLETED,
            quantity=request.quantity,
            total_price=total_price,
            description=request.description,
            note=request.note,
            product_id=product.id,
            supplier_id=supplier.id if supplier else None,
            user_id=user_id,
        )
        product.updated_at = utcnow()
        session = self.session
        session.add(product)
        session.add(db_item)
        await self._commit(context=transaction_type.value.lower())
        logger.info(
            f"{transaction_type.value} recorded: product={product.id} qty={request.quantity} "
            f"stock={product.stock_quantity} transaction={db_item.id}"
        )
        return await self.get_or_404(db_item.id)

    def _check_stock(self, product: Product, quantity: int) -> None:
        if product.stock_quantity < quantity:
            logger.info(
                f"Insufficient stock for product {product.id}: requested {quantity}, available {product.stock_quantity}"
            )
            raise InvalidArgumentError(
                f"Not enough stock for product '{product.name}': requested {quantity}, available {product.stock_quantity}",
                details={"requested": quantity, "available": product.stock_quantity},
            )

    # --- Операции ---

    async def purchase(self, request: TransactionRequest, user_id: Optional[UUID] = None) -> Transaction:
        """Закупка у поставщика: остаток растет."""
        supplier = await self._get_supplier(request.supplier_id, required=True)
        product = await self._get_product_for_update(request.product_id)
        product.stock_quantity += request.quantity
        return await self._record(TransactionType.PURCHASE, request, product, supplier, user_id)

    async def sell(self, request: TransactionRequest, user_id: Optional[UUID] = None) -> Transaction:
        """Продажа: остаток уменьшается, не может уйти в минус."""
        supplier = await self._get_supplier(request.supplier_id, required=False)
        product = await self._get_product_for_update(request.product_id)
        self._check_stock(product, request.quantity)
        product.stock_quantity -= request.quantity
        return await self._record(TransactionType.SALE, request, product, supplier, user_id)

    async def return_to_supplier(self, request: TransactionRequest, user_id: Optional[UUID] = None) -> Transaction:
        """Возврат поставщику: остаток уменьшается."""
        supplier = await self._get_supplier(request.supplier_id, required=True)
        product = await self._get_product_for_update(request.product_id)
        self._check_stock(product, request.quantity)
        product.stock_quantity -= request.quantity
        return await self._record(TransactionType.RETURN, request, product, supplier, user_id)

    async def update_status(self, item_id: UUID, status: TransactionStatus) -> Transaction:
        db_item = await self.get_or_404(item_id)
        if db_item.status == status:
            return db_item
        db_item.status = status
        db_item.updated_at = utcnow()
        self.session.add(db_item)
        await self._commit(context="update status")
        logger.info(f"Transaction {item_id} status changed to {status.value}")
        return await self.get_or_404(item_id)

    async def list_by_month_and_year(self, month: int, year: int, *, page: int = 0, size: int = 50) -> Dict[str, Any]:
        return await self.search(by_month_and_year(month, year), page=page, size=size)

    async def list_for_user(self, user_id: UUID, *, page: int = 0, size: int = 50) -> Dict[str, Any]:
        return await self.search(Transaction.user_id == user_id, page=page, size=size)  # type: ignore[arg-type]

    async def create(self, data: Any) -> Transaction:
        raise InvalidArgumentError("Transactions are created through purchase, sell or return operations")

    async def update(self, item_id: UUID, data: Any) -> Transaction:
        raise InvalidArgumentError("Only the status of a transaction can be changed")
