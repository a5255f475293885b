"""
services/product_service.py
----------------------------
Business logic for the product catalogue.
"""

from db.connection import ConnectionPool
from exceptions import NotFoundError, ValidationError
from models.product import Product
from repositories.product_repo import ProductRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class ProductService:
    """Catalogue reads and admin writes."""

    def __init__(self, pool: ConnectionPool):
        self.repo = ProductRepository(pool)

    def list_products(self) -> list[Product]:
        return self.repo.get_all()

    def get_product(self, product_id: int) -> Product:
        """
        Fetch a product by id.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = self.repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, product: Product) -> Product:
        """Validate and persist a new product."""
        if product.price < 0:
            raise ValidationError("'price' must be >= 0", field="price")
        if product.stock < 0:
            raise ValidationError("'stock' must be >= 0", field="stock")
        return self.repo.add(product)

    def delete_product(self, product_id: int) -> bool:
        deleted = self.repo.delete(product_id)
        if not deleted:
            logger.info(f"Delete requested for missing product #{product_id}")
        return deleted
