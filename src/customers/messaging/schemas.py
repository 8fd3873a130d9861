"""Pydantic payload and reply schemas for the message patterns.

These are the external contracts of the service. Payload keys arrive in
camelCase from the gateway; snake_case is accepted as well. Replies are
dumped in camelCase.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Contract(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------
class AddressPayload(_Contract):
    street: str = Field(..., max_length=255)
    street_number: int | None = Field(None, gt=0)
    city: str = Field(..., max_length=100)
    province: str = Field(..., max_length=100)
    zip_code: str = Field(..., max_length=5)
    additional_info: str | None = Field(None, max_length=500)


class CreateCustomerPayload(_Contract):
    id: str
    email: str = Field(..., max_length=254)
    address: AddressPayload


class UpdateCustomerPayload(_Contract):
    id: str
    address: AddressPayload


class CustomerIdPayload(_Contract):
    id: str


class CustomerEmailPayload(_Contract):
    email: str


class PaginationPayload(_Contract):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)


class UpdateCartPayload(_Contract):
    id: str
    dish_id: str


class CartEntryPayload(_Contract):
    dish_id: str
    quantity: int = Field(..., ge=1)


class SetCartPayload(_Contract):
    id: str
    items: list[CartEntryPayload]


class RestartCartPayload(_Contract):
    customer_id: str


# ---------------------------------------------------------------------------
# Replies
# ---------------------------------------------------------------------------
class AddressReply(_Contract):
    street: str
    street_number: int | None = None
    city: str
    province: str
    zip_code: str
    additional_info: str | None = None


class CustomerReply(_Contract):
    id: str
    email: str
    address: AddressReply
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PageMetaReply(_Contract):
    total: int
    page: int
    last_page: int


class CustomerPageReply(_Contract):
    data: list[CustomerReply]
    meta: PageMetaReply


class CartItemReply(_Contract):
    id: str
    cart_id: str
    dish_id: str
    quantity: int


class RemovedCartItemReply(CartItemReply):
    deleted: bool


class CartReply(_Contract):
    id: str
    customer_id: str
    items: list[CartItemReply]


class RestartCartReply(_Contract):
    count: int


def dump(reply_cls, data):
    """Validate ``data`` against ``reply_cls`` and dump it as camelCase JSON types."""
    return reply_cls.model_validate(data).model_dump(mode="json", by_alias=True)
