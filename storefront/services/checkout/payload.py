"""Projection of an order into the message both downstream sinks receive.

Field aliases are the wire names the queue consumer and the delivery function
already parse, so payloads must be dumped with `by_alias=True`.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from storefront.services.ordering.models import Order


class ShippingAddress(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    street: str = Field(alias="Street")
    city: str = Field(alias="City")
    state: str = Field(alias="State")
    country: str = Field(alias="Country")
    zipcode: str = Field(alias="Zipcode")


class PayloadItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    item_id: str = Field(alias="ItemId")
    quantity: int = Field(alias="Quantity")


class NotificationPayload(BaseModel):
    """Flattened, sink-specific view of one order."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    order_id: str = Field(alias="OrderId")
    shipping_address: ShippingAddress = Field(alias="shippingAddress")
    items: list[PayloadItem]
    total_price: Decimal = Field(alias="totalPrice")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), alias="createdAt")

    @field_serializer("total_price")
    def _total_as_number(self, value: Decimal) -> float:
        return float(value)

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


def build_notification_payload(order: Order) -> NotificationPayload:
    """Build a fresh payload for one sink.

    Every call gets its own message id and capture timestamp, so call it once per
    sink rather than sharing the result.
    """

    return NotificationPayload(
        order_id=order.order_id,
        shipping_address=ShippingAddress(
            street=order.ship_to_street,
            city=order.ship_to_city,
            state=order.ship_to_state,
            country=order.ship_to_country,
            zipcode=order.ship_to_zipcode,
        ),
        items=[PayloadItem(item_id=item.order_item_id, quantity=item.units) for item in order.items],
        total_price=order.total(),
    )
