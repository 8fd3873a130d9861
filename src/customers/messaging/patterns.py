"""Message patterns of the Customers service.

Handlers here only translate payloads into commands or lookups and shape the
replies. Rules live in the aggregates and command handlers.
"""

import json
from urllib.parse import unquote

from protean.utils.globals import current_domain

from customers.cart.items import AddToCart, RemoveFromCart
from customers.cart.queries import find_customer_cart
from customers.cart.replacement import SetCart
from customers.cart.restart import RestartCart
from customers.customer.address import UpdateCustomerAddress
from customers.customer.deletion import DeleteCustomer
from customers.customer.lookup import find_customer, find_customer_by_email, list_customers
from customers.customer.registration import CreateCustomer
from customers.domain import customers
from customers.messaging.router import MessageRouter
from customers.messaging.schemas import (
    CartItemReply,
    CartReply,
    CreateCustomerPayload,
    CustomerEmailPayload,
    CustomerIdPayload,
    CustomerPageReply,
    CustomerReply,
    PaginationPayload,
    RemovedCartItemReply,
    RestartCartPayload,
    RestartCartReply,
    SetCartPayload,
    UpdateCartPayload,
    UpdateCustomerPayload,
    dump,
)

router = MessageRouter(customers)


def _address_fields(address):
    return {
        "street": address.street,
        "street_number": address.street_number,
        "city": address.city,
        "province": address.province,
        "zip_code": address.zip_code,
        "additional_info": address.additional_info,
    }


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------
@router.message_pattern("createCustomer", schema=CreateCustomerPayload)
def create_customer(payload: CreateCustomerPayload):
    command = CreateCustomer(
        customer_id=payload.id,
        email=payload.email,
        **_address_fields(payload.address),
    )
    return dump(CustomerReply, current_domain.process(command, asynchronous=False))


@router.message_pattern("findAllCustomers", schema=PaginationPayload)
def find_all_customers(payload: PaginationPayload):
    page = list_customers(page=payload.page, limit=payload.limit)
    return dump(
        CustomerPageReply,
        {
            "data": [customer.snapshot() for customer in page["data"]],
            "meta": page["meta"],
        },
    )


@router.message_pattern("findOneCustomer", schema=CustomerIdPayload)
def find_one_customer(payload: CustomerIdPayload):
    return dump(CustomerReply, find_customer(payload.id).snapshot())


@router.message_pattern("findOneCustomerByEmail", schema=CustomerEmailPayload)
def find_one_customer_by_email(payload: CustomerEmailPayload):
    return dump(CustomerReply, find_customer_by_email(unquote(payload.email)).snapshot())


@router.event_pattern("updateCustomer", schema=UpdateCustomerPayload)
def update_customer(payload: UpdateCustomerPayload):
    command = UpdateCustomerAddress(customer_id=payload.id, **_address_fields(payload.address))
    current_domain.process(command, asynchronous=False)


@router.message_pattern("deleteCustomer", schema=CustomerIdPayload, guard="id")
def delete_customer(payload: CustomerIdPayload):
    command = DeleteCustomer(customer_id=payload.id)
    return dump(CustomerReply, current_domain.process(command, asynchronous=False))


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@router.message_pattern("findCustomerCart", schema=CustomerIdPayload)
def find_cart(payload: CustomerIdPayload):
    return [dump(CartItemReply, item) for item in find_customer_cart(payload.id)]


@router.message_pattern("addToCart", schema=UpdateCartPayload, guard="id")
def add_to_cart(payload: UpdateCartPayload):
    command = AddToCart(customer_id=payload.id, dish_id=payload.dish_id)
    return dump(CartItemReply, current_domain.process(command, asynchronous=False))


@router.message_pattern("removeFromCart", schema=UpdateCartPayload, guard="id")
def remove_from_cart(payload: UpdateCartPayload):
    command = RemoveFromCart(customer_id=payload.id, dish_id=payload.dish_id)
    return dump(RemovedCartItemReply, current_domain.process(command, asynchronous=False))


@router.message_pattern("setCart", schema=SetCartPayload, guard="id")
def set_cart(payload: SetCartPayload):
    entries = [{"dish_id": entry.dish_id, "quantity": entry.quantity} for entry in payload.items]
    command = SetCart(customer_id=payload.id, items=json.dumps(entries))
    return dump(CartReply, current_domain.process(command, asynchronous=False))


@router.message_pattern("restartCart", schema=RestartCartPayload, guard="customer_id")
def restart_cart(payload: RestartCartPayload):
    command = RestartCart(customer_id=payload.customer_id)
    return dump(RestartCartReply, current_domain.process(command, asynchronous=False))


@router.event_pattern("order_paid", schema=RestartCartPayload, guard="customer_id")
def order_paid(payload: RestartCartPayload):
    current_domain.process(RestartCart(customer_id=payload.customer_id), asynchronous=False)
