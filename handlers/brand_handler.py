"""
handlers/brand_handler.py
--------------------------
Brand routes under /api/brands.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from handlers.dependencies import get_brand_service
from services.brand_service import BrandService

router = APIRouter(prefix="/api/brands", tags=["brands"])


class BrandCreate(BaseModel):
    name: str
    color: Optional[str] = None
    image: Optional[str] = None


@router.get("")
def list_brands(service: BrandService = Depends(get_brand_service)):
    return [b.to_dict() for b in service.list_brands()]


@router.post("")
def create_brand(body: BrandCreate, service: BrandService = Depends(get_brand_service)):
    brand = service.create_brand(body.name, body.color, body.image)
    return {"id": brand.id, "name": brand.name, "color": brand.color, "image": brand.image}


@router.delete("/{brand_id}")
def delete_brand(brand_id: int, service: BrandService = Depends(get_brand_service)):
    service.delete_brand(brand_id)
    return {"message": "Brand deleted"}
