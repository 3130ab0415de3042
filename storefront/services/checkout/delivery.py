"""HTTP sink: pushes order details to the delivery-processing function."""

from dataclasses import dataclass

import httpx

from storefront.common.errors import NotifyError
from storefront.common.logging import logger
from storefront.services.checkout.payload import NotificationPayload
from storefront.services.checkout.schemas import NotificationResult


DELIVERY_RESOURCE_PATH = "/api/DeliveryOrderProcessor"


@dataclass(frozen=True)
class DeliveryConfig:
    base_url: str

    @classmethod
    def from_settings(cls, settings) -> "DeliveryConfig":
        return cls(base_url=settings.delivery_order_function_url)

    @property
    def url(self) -> str:
        return self.base_url + DELIVERY_RESOURCE_PATH


class DeliveryNotifier:
    """Posts one indented JSON payload per call. No retries."""

    sink = "delivery"

    def __init__(self, config: DeliveryConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self.transport = transport

    async def _post(self, payload: NotificationPayload) -> httpx.Response:
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.post(
                self.config.url,
                content=payload.to_json(indent=2),
                headers={"Content-Type": "application/json"},
            )
        if not response.is_success:
            raise NotifyError(f"delivery endpoint returned {response.status_code}", response.status_code)
        return response

    async def notify(self, payload: NotificationPayload) -> NotificationResult:
        try:
            await self._post(payload)
        except NotifyError as exc:
            logger.warning(
                "delivery_notify_rejected url=%s status=%s message_id=%s order_id=%s",
                self.config.url,
                exc.status_code,
                payload.id,
                payload.order_id,
            )
            return NotificationResult(
                sink=self.sink,
                message_id=payload.id,
                ok=False,
                status_code=exc.status_code,
                error=str(exc),
            )
        except Exception as exc:
            logger.warning(
                "delivery_notify_failed url=%s message_id=%s order_id=%s error=%s",
                self.config.url,
                payload.id,
                payload.order_id,
                exc,
            )
            return NotificationResult(sink=self.sink, message_id=payload.id, ok=False, error=str(exc))
        logger.info("delivery_notified message_id=%s order_id=%s", payload.id, payload.order_id)
        return NotificationResult(sink=self.sink, message_id=payload.id, ok=True)
