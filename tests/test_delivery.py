"""Unit tests for the delivery-processing HTTP sink."""

import json

import httpx
import pytest

from storefront.services.checkout.delivery import DeliveryConfig, DeliveryNotifier
from storefront.services.checkout.payload import NotificationPayload, PayloadItem, ShippingAddress


@pytest.fixture
def payload():
    return NotificationPayload(
        order_id="order-1",
        shipping_address=ShippingAddress(
            street="123 Main St.", city="Kent", state="OH", country="United States", zipcode="44240"
        ),
        items=[PayloadItem(item_id="oi-1", quantity=2)],
        total_price="20.00",
    )


def _notifier(handler) -> DeliveryNotifier:
    return DeliveryNotifier(
        DeliveryConfig(base_url="https://delivery.example.net"),
        transport=httpx.MockTransport(handler),
    )


def test_url_is_base_plus_resource_path():
    assert DeliveryConfig(base_url="https://fn.example.net").url == (
        "https://fn.example.net/api/DeliveryOrderProcessor"
    )


@pytest.mark.asyncio
async def test_posts_indented_json(payload):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    result = await _notifier(handler).notify(payload)

    assert result.ok
    assert result.sink == "delivery"
    (request,) = seen
    assert request.method == "POST"
    assert str(request.url) == "https://delivery.example.net/api/DeliveryOrderProcessor"
    assert request.headers["content-type"] == "application/json"
    assert "authorization" not in request.headers
    body = request.content.decode("utf-8")
    assert "\n  " in body
    assert json.loads(body)["id"] == payload.id
    assert json.loads(body)["totalPrice"] == 20.0


@pytest.mark.asyncio
async def test_non_success_status_is_logged_not_raised(payload, caplog):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503)

    result = await _notifier(handler).notify(payload)

    assert not result.ok
    assert result.status_code == 503
    assert len(calls) == 1
    assert any(r.levelname == "WARNING" and "delivery_notify_rejected" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_transport_error_is_logged_not_raised(payload, caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await _notifier(handler).notify(payload)

    assert not result.ok
    assert result.status_code is None
    assert "connection refused" in result.error
    assert any(r.levelname == "WARNING" and "delivery_notify_failed" in r.getMessage() for r in caplog.records)
