"""
models/order.py
---------------
Domain models for orders, their line items, and the validated
"place order" payload consumed by the OrderService.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from config import DEFAULT_ORDER_STATUS, ORDER_STATUSES
from exceptions import ValidationError


@dataclass
class OrderItem:
    """
    One line of an order.

    Attributes:
        id: Database primary key (None for new records).
        order_id: The owning order.
        product_id: The purchased product.
        quantity: Units purchased (always > 0).
        price_at_purchase: Unit price snapshot taken when the order was placed.
    """
    order_id: int
    product_id: int
    quantity: int
    price_at_purchase: Decimal
    id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order_id": self.order_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "price_at_purchase": float(self.price_at_purchase),
        }


@dataclass
class Order:
    """
    A persisted order header, optionally with its line items attached.

    Attributes:
        id: Database primary key.
        user_id: Owning user, or None for a guest checkout.
        total: Order total as submitted by the client.
        shipping_address: Opaque structured address, stored verbatim.
        status: Workflow status ('pending' at creation).
        created_at: Timestamp when the record was created.
        user_email: Owner's email, when loaded with the user join.
        user_name: Owner's name, when loaded with the user join.
        items: Line items belonging to this order.
    """
    id: int
    total: Decimal
    shipping_address: Any
    status: str
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    items: list[OrderItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "total": float(self.total),
            "shipping_address": self.shipping_address,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "user_email": self.user_email,
            "user_name": self.user_name,
            "items": [item.to_dict() for item in self.items],
        }


# ── Incoming payload ──────────────────────────────────────

def _parse_amount(value: Any, name: str) -> Decimal:
    """Parse a non-negative, finite decimal amount."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"'{name}' is required and must be a number", field=name)
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"'{name}' must be a number", field=name)
    if not amount.is_finite():
        raise ValidationError(f"'{name}' must be a finite number", field=name)
    if amount < 0:
        raise ValidationError(f"'{name}' must be >= 0", field=name)
    return amount


def _parse_id(value: Any, name: str) -> int:
    """Parse a positive integer reference."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationError(f"'{name}' must be an integer id", field=name)
    try:
        parsed = int(value)
    except ValueError:
        raise ValidationError(f"'{name}' must be an integer id", field=name)
    if parsed <= 0:
        raise ValidationError(f"'{name}' must be a positive id", field=name)
    return parsed


@dataclass(frozen=True)
class LineItemPayload:
    """One requested line: product, quantity and the price the client saw."""
    product_id: int
    quantity: int
    price: Decimal

    @property
    def extension(self) -> Decimal:
        return self.price * self.quantity

    @classmethod
    def from_dict(cls, data: Any, index: int) -> "LineItemPayload":
        name = f"items[{index}]"
        if not isinstance(data, dict):
            raise ValidationError(f"'{name}' must be an object", field=name)

        # The storefront client sends the product reference as `id`.
        product_ref = data.get("product_id", data.get("id"))
        if product_ref is None:
            raise ValidationError(f"'{name}.product_id' is required", field=f"{name}.product_id")
        product_id = _parse_id(product_ref, f"{name}.product_id")

        quantity = data.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(
                f"'{name}.quantity' must be a positive integer", field=f"{name}.quantity"
            )

        price = _parse_amount(data.get("price"), f"{name}.price")
        return cls(product_id=product_id, quantity=quantity, price=price)


@dataclass(frozen=True)
class OrderPayload:
    """
    A validated "place order" request.

    Built with ``OrderPayload.from_dict``; construction never touches storage.
    """
    total: Decimal
    shipping_address: Any
    items: tuple[LineItemPayload, ...]
    status: str = DEFAULT_ORDER_STATUS
    user_id: Optional[int] = None

    @property
    def items_total(self) -> Decimal:
        return sum((item.extension for item in self.items), Decimal("0"))

    @classmethod
    def from_dict(cls, data: Any) -> "OrderPayload":
        """
        Validate a parsed JSON body.

        Raises:
            ValidationError: If a required field is missing or malformed.
        """
        if not isinstance(data, dict):
            raise ValidationError("Order payload must be an object")

        # Falsy user ids (None, 0, "") are guest checkouts.
        raw_user = data.get("user_id")
        user_id = _parse_id(raw_user, "user_id") if raw_user else None

        total = _parse_amount(data.get("total"), "total")

        shipping_address = data.get("shipping_address")
        if shipping_address is None:
            raise ValidationError("'shipping_address' is required", field="shipping_address")
        try:
            json.dumps(shipping_address)
        except (TypeError, ValueError):
            raise ValidationError(
                "'shipping_address' must be JSON-serializable", field="shipping_address"
            )

        status = data.get("status") or DEFAULT_ORDER_STATUS
        if status not in ORDER_STATUSES:
            raise ValidationError(
                f"'status' must be one of: {', '.join(ORDER_STATUSES)}", field="status"
            )

        raw_items = data.get("items")
        if not isinstance(raw_items, list) or not raw_items:
            raise ValidationError("'items' must be a non-empty list", field="items")
        items = tuple(LineItemPayload.from_dict(item, i) for i, item in enumerate(raw_items))

        return cls(
            total=total,
            shipping_address=shipping_address,
            items=items,
            status=status,
            user_id=user_id,
        )
