"""Cart aggregate: the single active cart of a customer.

A cart holds at most one line per dish. Adding a dish that is already in the
cart raises that line's quantity instead of creating a second line, and
removing a dish lowers the quantity one unit at a time until the line is
deleted. Quantities are therefore always at least 1.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from customers.cart.events import (
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    CartReplaced,
    CartRestarted,
)
from customers.domain import customers


@customers.entity(part_of="Cart")
class CartItem:
    dish_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


def aggregate_lines(entries):
    """Collapse ``entries`` into ``{dish_id: quantity}``, summing repeated dishes.

    Keeps the order in which each dish first appears. Raises ValidationError
    when any entry carries a quantity below 1.
    """
    totals = {}
    for entry in entries:
        dish_id = str(entry["dish_id"])
        quantity = int(entry["quantity"])
        if quantity < 1:
            raise ValidationError({"items": [f"Quantity for dish {dish_id} must be at least 1"]})
        totals[dish_id] = totals.get(dish_id, 0) + quantity
    return totals


@customers.aggregate
class Cart:
    customer_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_dish(self):
        dish_ids = [str(item.dish_id) for item in self.items]
        if len(dish_ids) != len(set(dish_ids)):
            raise ValidationError({"items": ["A dish can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------
    def find_item(self, dish_id):
        return next((i for i in self.items if str(i.dish_id) == str(dish_id)), None)

    def item_snapshot(self, item):
        return {
            "id": str(item.id),
            "cart_id": str(self.id),
            "dish_id": str(item.dish_id),
            "quantity": item.quantity,
        }

    def snapshot(self):
        return {
            "id": str(self.id),
            "customer_id": str(self.customer_id),
            "items": [self.item_snapshot(item) for item in self.items],
        }

    # -------------------------------------------------------------------
    # Line mutations
    # -------------------------------------------------------------------
    def add_dish(self, dish_id):
        """Add one unit of ``dish_id`` and return the affected line."""
        now = datetime.now(UTC)
        item = self.find_item(dish_id)

        if item:
            previous_quantity = item.quantity
            item.quantity = previous_quantity + 1
            self.raise_(
                CartItemQuantityChanged(
                    cart_id=str(self.id),
                    customer_id=str(self.customer_id),
                    item_id=str(item.id),
                    dish_id=str(dish_id),
                    previous_quantity=previous_quantity,
                    new_quantity=item.quantity,
                )
            )
        else:
            item = CartItem(dish_id=dish_id, quantity=1, added_at=now)
            self.add_items(item)
            self.raise_(
                CartItemAdded(
                    cart_id=str(self.id),
                    customer_id=str(self.customer_id),
                    item_id=str(item.id),
                    dish_id=str(dish_id),
                )
            )

        self.updated_at = now
        return item

    def remove_dish(self, dish_id):
        """Remove one unit of ``dish_id``.

        Returns the line and whether it was deleted. A line at quantity 1 is
        deleted rather than dropped to 0.
        """
        item = self.find_item(dish_id)
        if item is None:
            raise ObjectNotFoundError({"dish_id": [f"Dish with ID {dish_id} not found in the cart"]})

        now = datetime.now(UTC)
        if item.quantity > 1:
            previous_quantity = item.quantity
            item.quantity = previous_quantity - 1
            self.raise_(
                CartItemQuantityChanged(
                    cart_id=str(self.id),
                    customer_id=str(self.customer_id),
                    item_id=str(item.id),
                    dish_id=str(dish_id),
                    previous_quantity=previous_quantity,
                    new_quantity=item.quantity,
                )
            )
            deleted = False
        else:
            self.remove_items(item)
            self.raise_(
                CartItemRemoved(
                    cart_id=str(self.id),
                    customer_id=str(self.customer_id),
                    item_id=str(item.id),
                    dish_id=str(dish_id),
                )
            )
            deleted = True

        self.updated_at = now
        return item, deleted

    # -------------------------------------------------------------------
    # Global resets
    # -------------------------------------------------------------------
    def clear_lines(self):
        """Delete every line without raising an event; returns the count."""
        existing = list(self.items)
        for item in existing:
            self.remove_items(item)
        return len(existing)

    def replace_items(self, entries):
        """Discard every line and rebuild the cart from ``entries``.

        ``entries`` is a list of ``{"dish_id", "quantity"}`` mappings.
        Repeated dishes are merged into one line with the summed quantity.
        """
        lines = aggregate_lines(entries)
        now = datetime.now(UTC)

        with atomic_change(self):
            removed_count = self.clear_lines()
            for dish_id, quantity in lines.items():
                self.add_items(CartItem(dish_id=dish_id, quantity=quantity, added_at=now))
            self.updated_at = now

        self.raise_(
            CartReplaced(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                removed_count=removed_count,
                line_count=len(lines),
            )
        )
        return removed_count

    def restart(self):
        """Clear every line and return how many were deleted."""
        removed_count = self.clear_lines()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartRestarted(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                removed_count=removed_count,
            )
        )
        return removed_count
