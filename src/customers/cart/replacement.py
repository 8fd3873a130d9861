"""Full cart replacement: command and handler.

Deleting the old lines and creating the new ones happen in one unit of work,
so the emptied cart between the two steps is never visible.
"""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from customers.cart.cart import Cart
from customers.cart.items import load_cart
from customers.domain import customers


@customers.command(part_of="Cart")
class SetCart:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {dish_id, quantity}


@customers.command_handler(part_of=Cart)
class SetCartHandler:
    @handle(SetCart)
    def set_cart(self, command):
        entries = json.loads(command.items)

        cart = load_cart(command.customer_id)
        cart.replace_items(entries)

        current_domain.repository_for(Cart).add(cart)
        return cart.snapshot()
