"""Checkout saga logic.

Sequences order creation, the two downstream notifications and basket deletion
for one buyer. Only an empty basket short-circuits the sequence; sink failures
are absorbed by the sinks, and every other error propagates to the caller.
"""

from storefront.common import state_machine as states
from storefront.common.errors import EmptyBasketError
from storefront.common.logging import basket_id_ctx, logger, order_id_ctx
from storefront.common.metrics import checkout_outcomes_total, notification_failures_total
from storefront.common.state_machine import validate_transition
from storefront.common.tracing import get_tracer
from storefront.services.checkout.payload import build_notification_payload
from storefront.services.checkout.schemas import CheckoutOutcome, CheckoutResult, NotificationResult
from storefront.services.ordering.schemas import DEFAULT_SHIPPING_ADDRESS, Address


tracer = get_tracer(__name__)


class _Progress:
    """Tracks one checkout through the state machine."""

    def __init__(self) -> None:
        self.state = states.START
        self.history = [states.START]

    def advance(self, new_state: str) -> None:
        validate_transition(self.state, new_state)
        logger.info("checkout_transition from=%s to=%s", self.state, new_state)
        self.state = new_state
        self.history.append(new_state)


class CheckoutService:
    """Owns the checkout sequence; holds no state between invocations."""

    def __init__(
        self,
        basket_service,
        order_service,
        publisher,
        notifier,
        service_name: str = "checkout",
    ) -> None:
        self.basket_service = basket_service
        self.order_service = order_service
        self.publisher = publisher
        self.notifier = notifier
        self.service_name = service_name

    def _record_notification(self, result: NotificationResult) -> NotificationResult:
        if not result.ok:
            notification_failures_total.labels(service=self.service_name, sink=result.sink).inc()
        return result

    async def checkout(
        self,
        buyer_id: str,
        quantities: dict[str, int] | None = None,
        address: Address = DEFAULT_SHIPPING_ADDRESS,
    ) -> CheckoutResult:
        """Run one checkout for the buyer's current basket."""

        progress = _Progress()

        with tracer.start_as_current_span("checkout.load_basket"):
            basket = await self.basket_service.get_or_create_basket_for_user(buyer_id)
            basket_id = basket.basket_id
            basket_id_ctx.set(basket_id)
            if quantities:
                await self.basket_service.set_quantities(basket_id, quantities)
        progress.advance(states.BASKET_LOADED)

        with tracer.start_as_current_span("checkout.create_order"):
            try:
                order = await self.order_service.create_order(basket_id, address)
            except EmptyBasketError as exc:
                logger.warning("%s", exc)
                progress.advance(states.EMPTY_BASKET_REDIRECT)
                checkout_outcomes_total.labels(
                    service=self.service_name,
                    outcome=CheckoutOutcome.EMPTY_BASKET_REDIRECT.value,
                ).inc()
                return CheckoutResult(
                    outcome=CheckoutOutcome.EMPTY_BASKET_REDIRECT,
                    basket_id=basket_id,
                    states=progress.history,
                )
        order_id_ctx.set(order.order_id)
        progress.advance(states.ORDER_CREATED)

        # Each sink gets its own payload (own message id and timestamp); the
        # delivery call runs even when the queue publish failed.
        with tracer.start_as_current_span("checkout.notify"):
            notifications = [
                self._record_notification(await self.publisher.publish(build_notification_payload(order))),
                self._record_notification(await self.notifier.notify(build_notification_payload(order))),
            ]
        progress.advance(states.NOTIFIED)

        with tracer.start_as_current_span("checkout.clear_basket"):
            await self.basket_service.delete_basket(basket_id)
        progress.advance(states.BASKET_CLEARED)

        progress.advance(states.DONE)
        checkout_outcomes_total.labels(service=self.service_name, outcome=CheckoutOutcome.SUCCESS.value).inc()
        return CheckoutResult(
            outcome=CheckoutOutcome.SUCCESS,
            basket_id=basket_id,
            order_id=order.order_id,
            notifications=notifications,
            states=progress.history,
        )
