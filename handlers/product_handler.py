"""
handlers/product_handler.py
----------------------------
Catalogue routes under /api/products.
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from handlers.dependencies import get_product_service
from models.product import Product
from services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


class ProductCreate(BaseModel):
    """Request body for creating a product."""
    name_es: Optional[str] = None
    name_en: Optional[str] = None
    price: Decimal = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    image: Optional[str] = None
    category: Optional[str] = None
    description_es: Optional[str] = None
    description_en: Optional[str] = None


@router.get("")
def list_products(service: ProductService = Depends(get_product_service)):
    return [p.to_dict() for p in service.list_products()]


@router.get("/{product_id}")
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return service.get_product(product_id).to_dict()


@router.post("")
def create_product(body: ProductCreate, service: ProductService = Depends(get_product_service)):
    product = service.create_product(Product(**body.model_dump()))
    return product.to_dict()


@router.delete("/{product_id}")
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    service.delete_product(product_id)
    return {"message": "Product deleted"}
