"""Order persistence models.

Orders are written once at checkout and never updated afterwards.
"""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.common.db import Base


class Order(Base):
    """Immutable record of a completed purchase with its ship-to address."""

    __tablename__ = "orders"

    order_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid4()))
    buyer_id: Mapped[str] = mapped_column(String, index=True)
    ship_to_street: Mapped[str] = mapped_column(String)
    ship_to_city: Mapped[str] = mapped_column(String)
    ship_to_state: Mapped[str] = mapped_column(String)
    ship_to_country: Mapped[str] = mapped_column(String)
    ship_to_zipcode: Mapped[str] = mapped_column(String)
    order_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderItem.position",
    )

    def total(self) -> Decimal:
        """Sum of unit price times units across all lines."""

        return sum((item.unit_price * item.units for item in self.items), Decimal("0"))


class OrderItem(Base):
    """One ordered line copied from a basket line at checkout."""

    __tablename__ = "order_items"

    order_item_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid4()))
    order_id: Mapped[str] = mapped_column(ForeignKey("orders.order_id"), index=True)
    catalog_item_id: Mapped[str] = mapped_column(String)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    units: Mapped[int] = mapped_column(Integer)
    position: Mapped[int] = mapped_column(Integer, default=0)
    order: Mapped[Order] = relationship(back_populates="items")
