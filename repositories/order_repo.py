"""
repositories/order_repo.py
---------------------------
Data access layer for order headers and order line items.

The insert methods take the cursor of an already-open transaction: the
order header, its line items and the stock decrements must all run on the
same connection or atomicity is lost. The read methods borrow their own
pooled connection.
"""

from typing import Optional

from psycopg2 import extras

from db.connection import ConnectionPool
from models.order import LineItemPayload, Order, OrderItem, OrderPayload
from utils.logger import get_logger

logger = get_logger(__name__)

INSERT_ORDER_SQL = """
    INSERT INTO orders (user_id, total, shipping_address, status)
    VALUES (%s, %s, %s, %s)
    RETURNING id;
"""

INSERT_ORDER_ITEM_SQL = """
    INSERT INTO order_items (order_id, product_id, quantity, price_at_purchase)
    VALUES (%s, %s, %s, %s)
    RETURNING id;
"""

SELECT_ORDERS_SQL = """
    SELECT o.id, o.user_id, o.total, o.shipping_address, o.status, o.created_at,
           u.email, u.name
    FROM orders o
    LEFT JOIN users u ON o.user_id = u.id
    ORDER BY o.created_at DESC, o.id DESC;
"""

SELECT_ORDER_BY_ID_SQL = """
    SELECT o.id, o.user_id, o.total, o.shipping_address, o.status, o.created_at,
           u.email, u.name
    FROM orders o
    LEFT JOIN users u ON o.user_id = u.id
    WHERE o.id = %s;
"""

SELECT_ITEMS_FOR_ORDERS_SQL = """
    SELECT id, order_id, product_id, quantity, price_at_purchase
    FROM order_items
    WHERE order_id = ANY(%s)
    ORDER BY order_id, id;
"""


class OrderRepository:
    """Repository for the orders and order_items tables."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    # ── CREATE (inside a caller-owned transaction) ────────

    def insert_order(self, cur, payload: OrderPayload) -> int:
        """
        Insert an order header.

        Args:
            cur: Cursor of the enclosing transaction.
            payload: The validated order.

        Returns:
            The generated order id.
        """
        cur.execute(INSERT_ORDER_SQL, (
            payload.user_id,
            payload.total,
            extras.Json(payload.shipping_address),
            payload.status,
        ))
        return cur.fetchone()[0]

    def insert_line_item(self, cur, order_id: int, item: LineItemPayload) -> int:
        """
        Insert one line item, freezing the client-seen price as price_at_purchase.

        Returns:
            The generated line item id.
        """
        cur.execute(INSERT_ORDER_ITEM_SQL, (
            order_id, item.product_id, item.quantity, item.price,
        ))
        return cur.fetchone()[0]

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Order]:
        """
        Fetch every order with its owner and line items, newest first.

        Two statements in total: one for the headers, one batched fetch
        for all of their items.
        """
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SELECT_ORDERS_SQL)
                orders = [self._row_to_order(r) for r in cur.fetchall()]
                self._attach_items(cur, orders)
        return orders

    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Fetch a single order with its line items, or None if not found."""
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SELECT_ORDER_BY_ID_SQL, (order_id,))
                row = cur.fetchone()
                order = self._row_to_order(row) if row else None
                if order:
                    self._attach_items(cur, [order])
        return order

    # ── Helpers ───────────────────────────────────────────

    @staticmethod
    def _attach_items(cur, orders: list[Order]) -> None:
        if not orders:
            return
        by_id = {order.id: order for order in orders}
        cur.execute(SELECT_ITEMS_FOR_ORDERS_SQL, (list(by_id),))
        for r in cur.fetchall():
            by_id[r[1]].items.append(OrderItem(
                id=r[0], order_id=r[1], product_id=r[2], quantity=r[3], price_at_purchase=r[4],
            ))

    @staticmethod
    def _row_to_order(row: tuple) -> Order:
        """Convert a database row tuple to an Order domain object."""
        return Order(
            id=row[0],
            user_id=row[1],
            total=row[2],
            shipping_address=row[3],
            status=row[4],
            created_at=row[5],
            user_email=row[6],
            user_name=row[7],
        )
