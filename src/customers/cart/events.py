"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from customers.domain import customers


@customers.event(part_of="Cart")
class CartItemAdded:
    """A dish entered the cart as a new line with quantity 1."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    dish_id = Identifier(required=True)


@customers.event(part_of="Cart")
class CartItemQuantityChanged:
    """The quantity of an existing dish line went up or down by one."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    dish_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@customers.event(part_of="Cart")
class CartItemRemoved:
    """The last unit of a dish was removed, so its line is gone."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    dish_id = Identifier(required=True)


@customers.event(part_of="Cart")
class CartReplaced:
    """All lines were discarded and rebuilt from a caller-supplied list."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    removed_count = Integer(required=True)
    line_count = Integer(required=True)


@customers.event(part_of="Cart")
class CartRestarted:
    """All lines were cleared; the cart itself remains."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    removed_count = Integer(required=True)
