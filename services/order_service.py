"""
services/order_service.py
--------------------------
Order submission: the one multi-table write in the storefront.

A single "place order" creates the order header, one row per line item and
a stock decrement per item, all inside one database transaction taken from
the shared connection pool.

Workflow (submit_order):
    1. Validate the payload (no connection is touched on failure).
    2. Acquire a pooled connection and open a transaction.
    3. Insert the order header, capture its id.
    4. For each item, in payload order: insert the line item, then
       decrement the product's stock.
    5. Commit and return the order id, or roll everything back.
    6. Release the connection on every path.
"""

from typing import Any, Union

from db.connection import ConnectionPool
from db.transaction import transaction
from exceptions import (
    ConstraintViolationError,
    NotFoundError,
    PoolExhaustionError,
    TransactionError,
    ValidationError,
)
from models.order import Order, OrderPayload
from repositories.inventory_repo import InventoryRepository
from repositories.order_repo import OrderRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Places and reads orders.

    Holds no per-call state; concurrent submit_order calls share only the
    connection pool. Conflicting decrements on the same product serialize on
    the database row lock.
    """

    def __init__(self, pool: ConnectionPool):
        self.pool = pool
        self.order_repo = OrderRepository(pool)
        self.inventory_repo = InventoryRepository(pool)

    def submit_order(self, payload: Union[OrderPayload, dict[str, Any]]) -> int:
        """
        Atomically create an order, its line items and the stock decrements.

        Args:
            payload: A parsed request body or an already validated OrderPayload.

        Returns:
            The committed order id.

        Raises:
            ValidationError: Payload rejected before any storage access.
            PoolExhaustionError: No connection within the pool's wait budget.
            ConstraintViolationError: Unknown user/product, or not enough stock.
            InfrastructureError: Connection loss, timeout or commit failure.
        """
        try:
            order = payload if isinstance(payload, OrderPayload) else OrderPayload.from_dict(payload)
        except ValidationError as e:
            logger.warning(f"Rejected order payload: {e.message}")
            raise

        if order.items_total != order.total:
            logger.warning(
                f"Order total {order.total} differs from line sum {order.items_total}; "
                f"storing the submitted total"
            )

        try:
            with transaction(self.pool) as cur:
                order_id = self.order_repo.insert_order(cur, order)
                for item in order.items:
                    self.order_repo.insert_line_item(cur, order_id, item)
                    self.inventory_repo.decrement_stock(cur, item.product_id, item.quantity)
        except (ConstraintViolationError, PoolExhaustionError) as e:
            logger.warning(f"Order not placed ({e.__class__.__name__}): {e.message}")
            raise
        except TransactionError as e:
            logger.error(f"Order not placed ({e.__class__.__name__}): {e.message}")
            raise

        logger.info(
            f"Placed order #{order_id} with {len(order.items)} item(s) "
            f"for {'user ' + str(order.user_id) if order.user_id else 'guest'}"
        )
        return order_id

    def list_orders(self) -> list[Order]:
        """All orders with owner details and line items, newest first."""
        return self.order_repo.get_all()

    def get_order(self, order_id: int) -> Order:
        """
        Fetch one order.

        Raises:
            NotFoundError: If no order has this id.
        """
        order = self.order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")
        return order
