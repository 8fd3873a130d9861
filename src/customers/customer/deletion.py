"""Customer deletion: command and handler.

The cart's lines, the cart and the customer go in one unit of work, so a
failure part way leaves all three in place.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from customers.cart.cart import Cart
from customers.customer.customer import Customer
from customers.customer.lookup import find_customer
from customers.domain import customers

logger = structlog.get_logger(__name__)


@customers.command(part_of="Customer")
class DeleteCustomer:
    customer_id = Identifier(required=True)


@customers.command_handler(part_of=Customer)
class DeleteCustomerHandler:
    @handle(DeleteCustomer)
    def delete_customer(self, command):
        customer = find_customer(command.customer_id)
        snapshot = customer.snapshot()

        cart_repo = current_domain.repository_for(Cart)
        try:
            cart = cart_repo.find_for_customer(customer.id)
        except ObjectNotFoundError:
            logger.warning("Deleting customer without a cart", customer_id=str(customer.id))
        else:
            cart.clear_lines()
            cart_repo.add(cart)
            cart_repo._dao.delete(cart)

        customer.mark_deleted()
        customer_repo = current_domain.repository_for(Customer)
        customer_repo.add(customer)
        customer_repo._dao.delete(customer)

        logger.info("Customer deleted", customer_id=str(customer.id))
        return snapshot
