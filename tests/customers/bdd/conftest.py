"""Shared BDD fixtures and step definitions for the Customers domain."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then

from customers.cart.cart import Cart
from customers.cart.events import (
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    CartReplaced,
    CartRestarted,
)

_CART_EVENT_CLASSES = {
    "CartItemAdded": CartItemAdded,
    "CartItemQuantityChanged": CartItemQuantityChanged,
    "CartItemRemoved": CartItemRemoved,
    "CartReplaced": CartReplaced,
    "CartRestarted": CartRestarted,
}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def outcome():
    """Container for what the last cart action returned."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    cart = Cart.create(customer_id="cust-001")
    cart._events.clear()
    return cart


@given(
    parsers.cfparse('dish "{dish_id}" is in the cart with quantity {qty:d}'),
    target_fixture="cart",
)
def cart_with_dish(cart, dish_id, qty):
    for _ in range(qty):
        cart.add_dish(dish_id)
    cart._events.clear()
    return cart


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_line(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse('dish "{dish_id}" has quantity {qty:d}'))
def dish_has_quantity(cart, dish_id, qty):
    item = cart.find_item(dish_id)
    assert item is not None, f"No line for {dish_id}"
    assert item.quantity == qty


@then("the cart action fails with a validation error")
def cart_action_fails_validation(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the cart action fails with a not found error")
def cart_action_fails_not_found(error):
    assert error["exc"] is not None, "Expected a not found error but none was raised"
    assert isinstance(error["exc"], ObjectNotFoundError)


@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in cart._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in cart._events]}"
