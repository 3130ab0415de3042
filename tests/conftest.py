"""Shared fixtures: in-memory storage and recording notification sinks."""

import os
from decimal import Decimal

# Pin env before the package reads settings at import time.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")
os.environ.setdefault("LOG_LEVEL", "INFO")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.common.db import create_schema
from storefront.services.basket.models import Basket, BasketItem
from storefront.services.basket.service import BasketService
from storefront.services.checkout.schemas import NotificationResult
from storefront.services.ordering.service import OrderService


class RecordingSink:
    """Stands in for a notification sink and remembers every payload it got."""

    def __init__(self, sink: str, ok: bool = True, status_code: int | None = None) -> None:
        self.sink = sink
        self.ok = ok
        self.status_code = status_code
        self.payloads = []

    async def _record(self, payload) -> NotificationResult:
        self.payloads.append(payload)
        return NotificationResult(
            sink=self.sink,
            message_id=payload.id,
            ok=self.ok,
            status_code=self.status_code,
            error=None if self.ok else f"{self.sink} unavailable",
        )

    async def publish(self, payload) -> NotificationResult:
        return await self._record(payload)

    async def notify(self, payload) -> NotificationResult:
        return await self._record(payload)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def basket_service(session_factory):
    return BasketService(session_factory)


@pytest.fixture
def order_service(session_factory):
    return OrderService(session_factory)


@pytest.fixture
def seed_basket(session_factory):
    """Insert a basket with `(catalog_item_id, quantity, unit_price)` lines."""

    def _seed(basket_id: str, buyer_id: str, lines: list[tuple[str, int, str]]) -> Basket:
        with session_factory() as db:
            basket = Basket(
                basket_id=basket_id,
                buyer_id=buyer_id,
                items=[
                    BasketItem(
                        catalog_item_id=catalog_item_id,
                        quantity=quantity,
                        unit_price=Decimal(unit_price),
                        position=position,
                    )
                    for position, (catalog_item_id, quantity, unit_price) in enumerate(lines)
                ],
            )
            db.add(basket)
            db.commit()
            return basket

    return _seed


@pytest.fixture
def queue_sink():
    return RecordingSink("queue")


@pytest.fixture
def delivery_sink():
    return RecordingSink("delivery")


@pytest.fixture
def make_sink():
    return RecordingSink
