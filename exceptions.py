"""
exceptions.py
-------------
Error taxonomy shared by every layer.

    ShopError
    ├── ValidationError          bad input, raised before touching storage
    ├── NotFoundError            lookup by id found nothing
    ├── AuthenticationError      login rejected
    ├── DuplicateError           unique value already taken
    └── TransactionError         failure while talking to the database
        ├── PoolExhaustionError      no connection within the wait budget
        ├── ConstraintViolationError rejected by a database constraint
        │   └── InsufficientStockError
        └── InfrastructureError      connection loss, timeout, commit failure

The dispatch layer maps these to HTTP status codes; nothing in here knows about HTTP.
"""

from typing import Optional


class ShopError(Exception):
    """Base exception for this application."""

    def __init__(self, message: str, *args):
        super().__init__(message, *args)
        self.message = message


class ValidationError(ShopError):
    """Raised when a payload is missing a required field or breaks a constraint."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(ShopError):
    """Raised when a record looked up by id does not exist."""


class AuthenticationError(ShopError):
    """Raised when login credentials do not match."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class DuplicateError(ShopError):
    """Raised when a unique value (e.g. an email) is already registered."""


class TransactionError(ShopError):
    """
    Raised for any failure during acquisition, statement execution or commit.

    Attributes:
        cause: The underlying driver exception, if any.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class PoolExhaustionError(TransactionError):
    """No pooled connection became available within the acquisition budget."""


class ConstraintViolationError(TransactionError):
    """The database rejected a write (unknown reference, check constraint, bad value)."""


class InsufficientStockError(ConstraintViolationError):
    """A stock decrement would have driven a product's stock below zero."""

    def __init__(self, product_id: int, requested: int):
        super().__init__(
            f"Insufficient stock for product {product_id} (requested {requested})"
        )
        self.product_id = product_id
        self.requested = requested


class InfrastructureError(TransactionError):
    """Connection loss, statement timeout or commit failure."""
