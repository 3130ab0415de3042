"""Checkout request/response schemas and orchestration results."""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field

from storefront.services.ordering.schemas import DEFAULT_SHIPPING_ADDRESS, Address


BASKET_INDEX_PAGE = "/Basket/Index"
CHECKOUT_SUCCESS_PAGE = "/Basket/Success"


class CheckoutOutcome(str, Enum):
    SUCCESS = "Success"
    EMPTY_BASKET_REDIRECT = "EmptyBasketRedirect"


class NotificationResult(BaseModel):
    """Outcome of one sink call. Failures are reported here, never raised."""

    sink: str
    message_id: str
    ok: bool
    status_code: int | None = None
    error: str | None = None


class CheckoutResult(BaseModel):
    """Terminal result of one checkout invocation."""

    outcome: CheckoutOutcome
    basket_id: str
    order_id: str | None = None
    notifications: list[NotificationResult] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)

    @property
    def redirect_to(self) -> str:
        if self.outcome is CheckoutOutcome.EMPTY_BASKET_REDIRECT:
            return BASKET_INDEX_PAGE
        return CHECKOUT_SUCCESS_PAGE


class CheckoutRequest(BaseModel):
    """Payload accepted by `POST /basket/checkout`."""

    buyer_id: str = Field(min_length=1)
    items: dict[str, Annotated[int, Field(ge=0)]] | None = Field(
        default=None,
        description="Final quantity per basket item id; 0 removes the line",
    )
    shipping_address: Address = DEFAULT_SHIPPING_ADDRESS


class CheckoutResponse(BaseModel):
    outcome: CheckoutOutcome
    redirect_to: str
    order_id: str | None = None
