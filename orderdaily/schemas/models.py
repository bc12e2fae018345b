"""Pydantic models used throughout the Orderdaily client.

These models define the client settings, the payload pieces that are
validated before they are sent, and the uniform result returned by every
endpoint method.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, field_validator

MAIN_API_BASE_PATH = "https://orderdaily.nl"
PARTNER_API_BASE_PATH = "https://partner.orderdaily.nl"

SORT_ORDERS = ("asc", "desc")
ORDER_STATUSES = ("pending", "paid", "shipped", "completed", "returned", "canceled")
PRODUCT_STATUSES = ("draft", "available", "archived")
VAT_TYPES = ("high", "low")


class ClientConfig(BaseModel):
    """Settings for a :class:`~orderdaily.client.Client`.

    Unknown keys are kept so callers can stash their own values through
    ``Client.set_config``. Assignments run the same validators as the
    constructor.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    application_name: str = Field("", description="Included in the User-Agent header")
    main_api_key: str = Field("", description="Bearer token for the main (admin) API")
    partner_api_key: str = Field("", description="Key for the partner order API")
    main_api_base: str = Field(MAIN_API_BASE_PATH, description="Base URL of the main API")
    partner_api_base: str = Field(PARTNER_API_BASE_PATH, description="Base URL of the partner API")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout in seconds")
    verify_ssl: bool = Field(True, description="Verify TLS certificates")
    retry_wait: float = Field(0.0, ge=0, description="Seconds to wait before re-attempting a 500")

    @field_validator("application_name", "main_api_key", "partner_api_key", mode="before")
    @classmethod
    def strip_strings(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("main_api_base", "partner_api_base")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class ApiResult(BaseModel):
    """Uniform outcome of an API call.

    ``value`` holds the decoded JSON body on success and a human readable
    message on error.
    """

    error: bool
    value: Any = None

    @property
    def ok(self) -> bool:
        return not self.error

    @classmethod
    def success(cls, value: Any) -> "ApiResult":
        return cls(error=False, value=value)

    @classmethod
    def failure(cls, message: str) -> "ApiResult":
        return cls(error=True, value=message)


class Variation(BaseModel):
    """A product variation as accepted by the products endpoints."""

    attribute_value_id: StrictInt
    manage_stock: StrictBool
    stock: StrictInt


class OrderRequest(BaseModel):
    """Customer and address details for an order on the partner API."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    firstname: str
    lastname: str
    street: str
    house_number: str
    postal_code: str
    city: str
    note: Optional[str] = None
