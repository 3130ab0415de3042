"""Basket persistence models.

A basket belongs to one buyer and is deleted once its checkout completes.
"""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.common.db import Base


class Basket(Base):
    """Transient collection of selected items awaiting checkout."""

    __tablename__ = "baskets"

    basket_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid4()))
    buyer_id: Mapped[str] = mapped_column(String, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    items: Mapped[list["BasketItem"]] = relationship(
        back_populates="basket",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="BasketItem.position",
    )


class BasketItem(Base):
    """One basket line: a catalog item, its captured unit price and a quantity."""

    __tablename__ = "basket_items"
    __table_args__ = (UniqueConstraint("basket_id", "catalog_item_id", name="uq_basket_catalog_item"),)

    item_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid4()))
    basket_id: Mapped[str] = mapped_column(ForeignKey("baskets.basket_id", ondelete="CASCADE"), index=True)
    catalog_item_id: Mapped[str] = mapped_column(String)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    quantity: Mapped[int] = mapped_column(Integer)
    position: Mapped[int] = mapped_column(Integer, default=0)
    basket: Mapped[Basket] = relationship(back_populates="items")
