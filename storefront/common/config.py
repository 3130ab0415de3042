"""Central environment-driven settings for the storefront process.

Loaded once at startup. Sink endpoints keep the key names used by the hosted
deployment (`ConnectionStrings:ServiceBusConnection`, `servicebus_queue_name`,
`DeliveryOrderFunctionUrl`); see `.env.example`.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CommonSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "storefront-checkout"
    log_level: str = "INFO"
    database_url: str = "sqlite+pysqlite:///./storefront.db"
    servicebus_connection: str = Field(
        default="",
        validation_alias=AliasChoices(
            "ConnectionStrings:ServiceBusConnection",
            "ConnectionStrings__ServiceBusConnection",
            "servicebus_connection",
        ),
    )
    servicebus_queue_name: str = Field(
        default="orders",
        validation_alias=AliasChoices("servicebus_queue_name", "SERVICEBUS_QUEUE_NAME"),
    )
    delivery_order_function_url: str = Field(
        default="",
        validation_alias=AliasChoices("DeliveryOrderFunctionUrl", "delivery_order_function_url"),
    )
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


settings = CommonSettings()
