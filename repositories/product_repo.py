"""
repositories/product_repo.py
-----------------------------
Data access layer for catalogue products.
All SQL queries related to the `products` table (except stock
decrements, see inventory_repo) live here.
"""

from typing import Optional

from db.connection import ConnectionPool
from models.product import Product
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = (
    "id, name_es, name_en, price, stock, image, category, "
    "description_es, description_en, created_at"
)


class ProductRepository:
    """Repository for CRUD operations on the products table."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    # ── CREATE ────────────────────────────────────────────

    def add(self, product: Product) -> Product:
        """
        Insert a new product.

        Returns:
            The same Product with its `id` and `created_at` populated.
        """
        sql = """
            INSERT INTO products (name_es, name_en, price, stock, image, category,
                                  description_es, description_en)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id, created_at;
        """
        with self.pool.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql, (
                        product.name_es, product.name_en, product.price, product.stock,
                        product.image, product.category,
                        product.description_es, product.description_en,
                    ))
                    row = cur.fetchone()
                    product.id = row[0]
                    product.created_at = row[1]
                conn.commit()
                logger.info(f"Added product #{product.id}")
                return product
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to add product: {e}")
                raise

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Product]:
        """Fetch all products, newest first."""
        sql = f"SELECT {_COLUMNS} FROM products ORDER BY created_at DESC;"
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_product(r) for r in cur.fetchall()]

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Fetch a single product by ID, or None if not found."""
        sql = f"SELECT {_COLUMNS} FROM products WHERE id = %s;"
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (product_id,))
                row = cur.fetchone()
                return self._row_to_product(row) if row else None

    # ── DELETE ────────────────────────────────────────────

    def delete(self, product_id: int) -> bool:
        """
        Delete a product by ID.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM products WHERE id = %s;"
        with self.pool.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql, (product_id,))
                    deleted = cur.rowcount > 0
                conn.commit()
                if deleted:
                    logger.info(f"Deleted product #{product_id}")
                return deleted
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to delete product #{product_id}: {e}")
                raise

    # ── Helpers ───────────────────────────────────────────

    @staticmethod
    def _row_to_product(row: tuple) -> Product:
        """Convert a database row tuple to a Product domain object."""
        return Product(
            id=row[0],
            name_es=row[1],
            name_en=row[2],
            price=row[3],
            stock=row[4],
            image=row[5],
            category=row[6],
            description_es=row[7],
            description_en=row[8],
            created_at=row[9],
        )
