"""
handlers/dependencies.py
-------------------------
FastAPI dependencies that hand each request its service objects.

The pool lives on ``app.state.pool``; tests swap services out through
``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from db.connection import ConnectionPool
from services.brand_service import BrandService
from services.health_service import HealthService
from services.order_service import OrderService
from services.product_service import ProductService
from services.user_service import UserService


def get_pool(request: Request) -> ConnectionPool:
    return request.app.state.pool


def get_order_service(pool: ConnectionPool = Depends(get_pool)) -> OrderService:
    return OrderService(pool)


def get_product_service(pool: ConnectionPool = Depends(get_pool)) -> ProductService:
    return ProductService(pool)


def get_brand_service(pool: ConnectionPool = Depends(get_pool)) -> BrandService:
    return BrandService(pool)


def get_user_service(pool: ConnectionPool = Depends(get_pool)) -> UserService:
    return UserService(pool)


def get_health_service(pool: ConnectionPool = Depends(get_pool)) -> HealthService:
    return HealthService(pool)
