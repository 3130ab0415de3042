"""Order creation from a stored basket."""

from datetime import datetime, timezone

from storefront.common.errors import BasketNotFoundError, EmptyBasketError
from storefront.common.logging import logger
from storefront.services.basket.models import Basket
from storefront.services.ordering.models import Order, OrderItem
from storefront.services.ordering.schemas import Address


class OrderService:
    """Turns a basket into a persisted order."""

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory

    async def create_order(self, basket_id: str, address: Address) -> Order:
        """Persist one order copied from the basket's lines.

        Raises `EmptyBasketError` when the basket has no lines. The basket itself
        is left untouched; deleting it is the caller's step.
        """

        with self.session_factory() as db:
            basket = db.get(Basket, basket_id)
            if basket is None:
                raise BasketNotFoundError(basket_id)
            if not basket.items:
                raise EmptyBasketError(basket_id)

            order = Order(
                buyer_id=basket.buyer_id,
                ship_to_street=address.street,
                ship_to_city=address.city,
                ship_to_state=address.state,
                ship_to_country=address.country,
                ship_to_zipcode=address.zipcode,
                order_date=datetime.now(timezone.utc),
                items=[
                    OrderItem(
                        catalog_item_id=line.catalog_item_id,
                        unit_price=line.unit_price,
                        units=line.quantity,
                        position=position,
                    )
                    for position, line in enumerate(basket.items)
                ],
            )
            db.add(order)
            db.commit()
            logger.info(
                "order_created order_id=%s basket_id=%s items=%s",
                order.order_id,
                basket_id,
                len(order.items),
            )
            return order
