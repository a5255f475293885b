"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db.connection import ConnectionPool
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, name, email, password_hash, role, points, created_at"


class UserRepository:
    """Repository for CRUD operations on the users table."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    def add(self, user: User) -> User:
        """
        Insert a new user.

        Args:
            user: User with `password_hash` already computed.

        Returns:
            The same User with `id` and `created_at` populated.
        """
        sql = """
            INSERT INTO users (name, email, password_hash, role, points)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING id, created_at;
        """
        with self.pool.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql, (
                        user.name, user.email, user.password_hash, user.role, user.points,
                    ))
                    row = cur.fetchone()
                    user.id = row[0]
                    user.created_at = row[1]
                conn.commit()
                logger.info(f"Registered user #{user.id}")
                return user
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to add user: {e}")
                raise

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by email.

        Returns:
            User or None.
        """
        sql = f"SELECT {_COLUMNS} FROM users WHERE email = %s;"
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (email,))
                row = cur.fetchone()
                return self._row_to_user(row) if row else None

    def get_all(self) -> list[User]:
        """Fetch all users."""
        sql = f"SELECT {_COLUMNS} FROM users ORDER BY id;"
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_user(r) for r in cur.fetchall()]

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        """Convert a database row tuple to a User domain object."""
        return User(
            id=row[0],
            name=row[1],
            email=row[2],
            password_hash=row[3],
            role=row[4],
            points=row[5],
            created_at=row[6],
        )
