"""Cart restart: clears every line while keeping the cart.

Reached both as the ``RestartCart`` command, which replies with the number of
deleted lines, and from the ``OrderPaid`` event handler, which replies to
no one.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from customers.cart.cart import Cart
from customers.domain import customers

logger = structlog.get_logger(__name__)


def restart_cart(customer_id) -> int:
    """Delete all lines of the customer's cart and return how many went."""
    repo = current_domain.repository_for(Cart)
    cart = repo.find_for_customer(customer_id)
    removed_count = cart.restart()
    repo.add(cart)

    logger.info("Cart restarted", customer_id=str(customer_id), removed_count=removed_count)
    return removed_count


@customers.command(part_of="Cart")
class RestartCart:
    customer_id = Identifier(required=True)


@customers.command_handler(part_of=Cart)
class RestartCartHandler:
    @handle(RestartCart)
    def restart(self, command):
        return {"count": restart_cart(command.customer_id)}
