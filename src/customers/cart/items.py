"""Cart line management: add and remove one unit of a dish."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from customers.cart.cart import Cart
from customers.customer.lookup import find_customer
from customers.domain import customers

logger = structlog.get_logger(__name__)


@customers.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier(required=True)
    dish_id = Identifier(required=True)


@customers.command(part_of="Cart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    dish_id = Identifier(required=True)


def load_cart(customer_id) -> Cart:
    """Check the customer, then return its cart. Nothing is written."""
    customer = find_customer(customer_id)
    return current_domain.repository_for(Cart).find_for_customer(customer.id)


@customers.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        cart = load_cart(command.customer_id)
        item = cart.add_dish(command.dish_id)
        current_domain.repository_for(Cart).add(cart)

        logger.info(
            "Dish added to cart",
            customer_id=str(command.customer_id),
            dish_id=str(command.dish_id),
            quantity=item.quantity,
        )
        return cart.item_snapshot(item)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = load_cart(command.customer_id)
        item, deleted = cart.remove_dish(command.dish_id)
        current_domain.repository_for(Cart).add(cart)

        logger.info(
            "Dish removed from cart",
            customer_id=str(command.customer_id),
            dish_id=str(command.dish_id),
            line_deleted=deleted,
        )
        return {**cart.item_snapshot(item), "deleted": deleted}
