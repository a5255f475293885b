"""
models/product.py
-----------------
Domain model for catalogue products.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Product:
    """
    Represents a product in the catalogue.

    Attributes:
        id: Database primary key (None for new records).
        name_es: Spanish display name.
        name_en: English display name.
        price: Current unit price.
        stock: Quantity on hand (never negative).
        image: Image URL.
        category: Free-form category label.
        description_es: Spanish description.
        description_en: English description.
        created_at: Timestamp when the record was created.
    """
    name_es: Optional[str]
    name_en: Optional[str]
    price: Decimal
    stock: int = 0
    image: Optional[str] = None
    category: Optional[str] = None
    description_es: Optional[str] = None
    description_en: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def in_stock(self, quantity: int = 1) -> bool:
        """Returns True if at least `quantity` units are on hand."""
        return self.stock >= quantity

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name_es": self.name_es,
            "name_en": self.name_en,
            "price": float(self.price),
            "stock": self.stock,
            "image": self.image,
            "category": self.category,
            "description_es": self.description_es,
            "description_en": self.description_en,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
