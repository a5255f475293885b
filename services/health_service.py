"""
services/health_service.py
---------------------------
Database round-trip check used by the health endpoint.
"""

from db.connection import ConnectionPool

HEALTH_SQL = "SELECT 1 + 1 AS solution;"


class HealthService:

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    def check(self) -> dict:
        """Run a trivial query; raises on any database failure."""
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(HEALTH_SQL)
                solution = cur.fetchone()[0]
        return {"status": "ok", "db_check": solution == 2, "pool_available": self.pool.available}
