"""Basket storage operations used around checkout."""

from decimal import Decimal

from sqlalchemy import select

from storefront.common.errors import BasketNotFoundError
from storefront.common.logging import logger
from storefront.services.basket.models import Basket, BasketItem


class BasketService:
    """Reads, adjusts and deletes buyer baskets."""

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory

    def _load(self, db, basket_id: str) -> Basket:
        basket = db.get(Basket, basket_id)
        if basket is None:
            raise BasketNotFoundError(basket_id)
        return basket

    async def get_or_create_basket_for_user(self, buyer_id: str) -> Basket:
        """Return the buyer's basket, creating an empty one on first use."""

        with self.session_factory() as db:
            basket = (
                db.execute(select(Basket).where(Basket.buyer_id == buyer_id).order_by(Basket.created_at))
                .scalars()
                .first()
            )
            if basket is not None:
                return basket
            basket = Basket(buyer_id=buyer_id, items=[])
            db.add(basket)
            db.commit()
            return basket

    async def get_basket_items(self, basket_id: str) -> list[BasketItem]:
        with self.session_factory() as db:
            return list(self._load(db, basket_id).items)

    async def add_item(
        self, basket_id: str, catalog_item_id: str, unit_price: Decimal, quantity: int = 1
    ) -> BasketItem:
        """Add units of a catalog item, merging into an existing line for the same item."""

        if quantity <= 0:
            raise ValueError("quantity must be positive")
        with self.session_factory() as db:
            basket = self._load(db, basket_id)
            for line in basket.items:
                if line.catalog_item_id == catalog_item_id:
                    line.quantity += quantity
                    db.commit()
                    return line
            line = BasketItem(
                catalog_item_id=catalog_item_id,
                unit_price=Decimal(unit_price),
                quantity=quantity,
                position=len(basket.items),
            )
            basket.items.append(line)
            db.commit()
            return line

    async def set_quantities(self, basket_id: str, quantities: dict[str, int]) -> Basket:
        """Apply per-line quantities keyed by basket item id; lines set to 0 are removed.

        Ids that do not belong to the basket are ignored.
        """

        with self.session_factory() as db:
            basket = self._load(db, basket_id)
            for line in list(basket.items):
                if line.item_id not in quantities:
                    continue
                quantity = quantities[line.item_id]
                if quantity < 0:
                    raise ValueError(f"quantity for item {line.item_id} must not be negative")
                if quantity == 0:
                    basket.items.remove(line)
                else:
                    line.quantity = quantity
            db.commit()
            return basket

    async def delete_basket(self, basket_id: str) -> None:
        with self.session_factory() as db:
            db.delete(self._load(db, basket_id))
            db.commit()
            logger.info("basket_deleted basket_id=%s", basket_id)
