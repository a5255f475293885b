"""
handlers/order_handler.py
--------------------------
Order routes under /api/orders.

The POST body is handed to OrderService unparsed so that the service's
own validation decides what a well-formed order is (400 on rejection).
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from handlers.dependencies import get_order_service
from services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("")
def list_orders(service: OrderService = Depends(get_order_service)):
    return [o.to_dict() for o in service.list_orders()]


@router.get("/{order_id}")
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return service.get_order(order_id).to_dict()


@router.post("")
def create_order(
    payload: Any = Body(...),
    service: OrderService = Depends(get_order_service),
):
    """Place an order; responds with the new order id."""
    order_id = service.submit_order(payload)
    return {"id": order_id, "message": "Order created successfully"}
