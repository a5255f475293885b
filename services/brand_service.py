"""
services/brand_service.py
--------------------------
Business logic for storefront brands.
"""

from typing import Optional

from db.connection import ConnectionPool
from exceptions import ValidationError
from models.brand import Brand
from repositories.brand_repo import BrandRepository


class BrandService:
    """Thin wrapper over BrandRepository."""

    def __init__(self, pool: ConnectionPool):
        self.repo = BrandRepository(pool)

    def list_brands(self) -> list[Brand]:
        return self.repo.get_all()

    def create_brand(self, name: str, color: Optional[str] = None, image: Optional[str] = None) -> Brand:
        if not name or not name.strip():
            raise ValidationError("'name' is required", field="name")
        return self.repo.add(Brand(name=name.strip(), color=color, image=image))

    def delete_brand(self, brand_id: int) -> bool:
        return self.repo.delete(brand_id)
