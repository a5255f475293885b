"""
repositories/brand_repo.py
---------------------------
Data access layer for brands.
"""

from db.connection import ConnectionPool
from models.brand import Brand
from utils.logger import get_logger

logger = get_logger(__name__)


class BrandRepository:
    """Repository for CRUD operations on the brands table."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    def add(self, brand: Brand) -> Brand:
        """Insert a brand and populate its id."""
        sql = """
            INSERT INTO brands (name, color, image)
            VALUES (%s, %s, %s)
            RETURNING id, created_at;
        """
        with self.pool.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql, (brand.name, brand.color, brand.image))
                    row = cur.fetchone()
                    brand.id = row[0]
                    brand.created_at = row[1]
                conn.commit()
                return brand
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to add brand: {e}")
                raise

    def get_all(self) -> list[Brand]:
        """Fetch all brands, newest first."""
        sql = "SELECT id, name, color, image, created_at FROM brands ORDER BY created_at DESC;"
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [
                    Brand(id=r[0], name=r[1], color=r[2], image=r[3], created_at=r[4])
                    for r in cur.fetchall()
                ]

    def delete(self, brand_id: int) -> bool:
        """Delete a brand; True if a row was removed."""
        sql = "DELETE FROM brands WHERE id = %s;"
        with self.pool.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql, (brand_id,))
                    deleted = cur.rowcount > 0
                conn.commit()
                return deleted
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to delete brand #{brand_id}: {e}")
                raise
