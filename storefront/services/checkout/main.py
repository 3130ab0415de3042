"""HTTP surface for basket checkout."""

from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse

from storefront.common.config import settings
from storefront.common.db import SessionLocal, create_schema
from storefront.common.errors import ConflictError
from storefront.common.logging import configure_logging, logger, trace_id_ctx
from storefront.common.metrics import (
    checkout_latency_seconds,
    checkout_requests_total,
    http_request_duration_seconds,
    http_requests_total,
    metrics_response,
)
from storefront.common.startup import log_startup_config
from storefront.common.tracing import instrument_app, setup_tracing
from storefront.services.basket.service import BasketService
from storefront.services.checkout.delivery import DeliveryConfig, DeliveryNotifier
from storefront.services.checkout.publisher import QueueConfig, QueuePublisher
from storefront.services.checkout.schemas import CheckoutRequest, CheckoutResponse
from storefront.services.checkout.service import CheckoutService
from storefront.services.ordering.service import OrderService

configure_logging()
setup_tracing(settings.service_name)
log_startup_config(
    settings.service_name,
    [
        "SERVICE_NAME",
        "DATABASE_URL",
        "ConnectionStrings__ServiceBusConnection",
        "servicebus_queue_name",
        "DeliveryOrderFunctionUrl",
    ],
)
create_schema()
service = CheckoutService(
    BasketService(SessionLocal),
    OrderService(SessionLocal),
    QueuePublisher(QueueConfig.from_settings(settings)),
    DeliveryNotifier(DeliveryConfig.from_settings(settings)),
    service_name=settings.service_name,
)

app = FastAPI(title="Storefront Checkout")
instrument_app(app)


@app.middleware("http")
async def fault_boundary(request: Request, call_next):
    """Turn any exception escaping a handler into a JSON error response."""

    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled exception occurred: %s", exc)
        status_code = 409 if isinstance(exc, ConflictError) else 500
        return JSONResponse(status_code=status_code, content={"statusCode": status_code, "message": str(exc)})


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Record request count and latency for every HTTP call."""

    start = perf_counter()
    route = request.url.path
    method = request.method
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        route_obj = request.scope.get("route")
        if route_obj is not None and getattr(route_obj, "path", None):
            route = route_obj.path
        return response
    finally:
        elapsed = max(0.0, perf_counter() - start)
        http_request_duration_seconds.labels(
            service=settings.service_name,
            route=route,
            method=method,
        ).observe(elapsed)
        http_requests_total.labels(
            service=settings.service_name,
            route=route,
            method=method,
            status_code=str(status_code),
        ).inc()


@app.post("/basket/checkout", response_model=CheckoutResponse)
async def checkout(req: CheckoutRequest, x_trace_id: str | None = Header(default=None)):
    """Check out the buyer's basket and report where the caller should go next."""

    trace_id_ctx.set(x_trace_id or str(uuid4()))
    checkout_requests_total.labels(service=settings.service_name).inc()
    with checkout_latency_seconds.labels(service=settings.service_name).time():
        result = await service.checkout(req.buyer_id, req.items, req.shipping_address)
    return CheckoutResponse(outcome=result.outcome, redirect_to=result.redirect_to, order_id=result.order_id)


@app.get("/metrics")
def metrics():
    """Prometheus scrape endpoint."""

    return metrics_response()


@app.get("/health")
def health():
    """Container health probe endpoint."""

    return {"ok": True}
