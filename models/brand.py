"""
models/brand.py
---------------
Domain model for storefront brands.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Brand:
    """A brand card: name, accent colour and logo image."""
    name: str
    color: Optional[str] = None
    image: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "image": self.image,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
