"""
models/user.py
--------------
Domain model for storefront users.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """
    Represents a registered user.

    Attributes:
        id: Database primary key (None for new records).
        name: Display name.
        email: Unique login email.
        password_hash: Salted hash; never serialized.
        role: 'user' or 'admin'.
        points: Loyalty points balance.
        created_at: Timestamp when the record was created.
    """
    name: str
    email: str
    password_hash: str = ""
    role: str = "user"
    points: int = 0
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        """Profile fields safe to send to clients."""
        data = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "points": self.points,
        }
        if self.created_at:
            data["created_at"] = self.created_at.isoformat()
        return data
