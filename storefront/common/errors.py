"""Exception types shared by storefront services.

Only `EmptyBasketError` changes the checkout path. Conflict-class errors map to
HTTP 409 at the fault boundary; everything else unhandled maps to 500.
`PublishError` and `NotifyError` never leave their sink.
"""


class EmptyBasketError(Exception):
    """Raised when an order is requested for a basket with no lines."""

    def __init__(self, basket_id: str) -> None:
        super().__init__(f"Basket with id {basket_id} is empty.")
        self.basket_id = basket_id


class BasketNotFoundError(LookupError):
    """Raised when a basket id does not reference a stored basket."""

    def __init__(self, basket_id: str) -> None:
        super().__init__(f"Basket with id {basket_id} not found.")
        self.basket_id = basket_id


class ConflictError(Exception):
    """Base for faults the HTTP boundary reports as 409 Conflict."""


class DuplicateError(ConflictError):
    """Raised when creating a record that already exists."""


class PublishError(Exception):
    """Queue sink failure (serialization, connection or broker rejection)."""


class NotifyError(Exception):
    """Delivery endpoint failure (non-success status or transport error)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
