"""Value objects accepted by the ordering service."""

from pydantic import BaseModel, ConfigDict, Field


class Address(BaseModel):
    """Ship-to address captured on an order."""

    model_config = ConfigDict(frozen=True)

    street: str = Field(min_length=1, max_length=180)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=60)
    country: str = Field(min_length=1, max_length=90)
    zipcode: str = Field(min_length=1, max_length=18)


DEFAULT_SHIPPING_ADDRESS = Address(
    street="123 Main St.",
    city="Kent",
    state="OH",
    country="United States",
    zipcode="44240",
)
