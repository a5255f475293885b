"""
repositories/inventory_repo.py
-------------------------------
Data access layer for the inventory ledger (the `stock` column of products).

Stock is only ever changed with relative updates (`stock = stock - n`),
never read-then-written, so concurrent orders on the same product serialize
on the row lock instead of overwriting each other.
"""

from typing import Optional

from db.connection import ConnectionPool
from exceptions import InsufficientStockError
from utils.logger import get_logger

logger = get_logger(__name__)

DECREMENT_STOCK_SQL = """
    UPDATE products
    SET stock = stock - %s
    WHERE id = %s AND stock >= %s
    RETURNING stock;
"""

SELECT_STOCK_SQL = "SELECT stock FROM products WHERE id = %s;"


class InventoryRepository:
    """Repository for reading and decrementing product stock."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    def decrement_stock(self, cur, product_id: int, quantity: int) -> int:
        """
        Decrement a product's stock within the caller's transaction.

        Args:
            cur: Cursor of the enclosing transaction.
            product_id: Product to decrement.
            quantity: Units to remove (> 0).

        Returns:
            The remaining stock.

        Raises:
            InsufficientStockError: Fewer than `quantity` units on hand
                (or the product does not exist).
        """
        cur.execute(DECREMENT_STOCK_SQL, (quantity, product_id, quantity))
        row = cur.fetchone()
        if row is None:
            raise InsufficientStockError(product_id, quantity)
        return row[0]

    def get_stock(self, product_id: int) -> Optional[int]:
        """Current stock for a product, or None if the product does not exist."""
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SELECT_STOCK_SQL, (product_id,))
                row = cur.fetchone()
        return row[0] if row else None
