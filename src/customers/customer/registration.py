"""Customer creation: command and handler.

The customer and its empty cart are stored in the same unit of work, so a
customer never exists without a cart.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from customers.cart.cart import Cart
from customers.customer.customer import Address, Customer
from customers.customer.exceptions import CustomerAlreadyExists
from customers.customer.lookup import email_in_use
from customers.domain import customers

logger = structlog.get_logger(__name__)


@customers.command(part_of="Customer")
class CreateCustomer:
    customer_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    street = String(required=True, max_length=255)
    street_number = Integer(min_value=1)
    city = String(required=True, max_length=100)
    province = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=5)
    additional_info = String(max_length=500)


@customers.command_handler(part_of=Customer)
class CreateCustomerHandler:
    @handle(CreateCustomer)
    def create_customer(self, command):
        repo = current_domain.repository_for(Customer)

        if email_in_use(command.email):
            raise CustomerAlreadyExists({"email": [f"Customer with email {command.email} already exists"]})
        try:
            repo.get(command.customer_id)
        except ObjectNotFoundError:
            pass
        else:
            raise CustomerAlreadyExists({"id": [f"Customer #{command.customer_id} already exists"]})

        address = Address(
            street=command.street,
            street_number=command.street_number,
            city=command.city,
            province=command.province,
            zip_code=command.zip_code,
            additional_info=command.additional_info,
        )
        customer = Customer.create(
            customer_id=command.customer_id,
            email=command.email,
            address=address,
        )
        repo.add(customer)
        current_domain.repository_for(Cart).add(Cart.create(customer_id=customer.id))

        logger.info("Customer created", customer_id=str(customer.id))
        return customer.snapshot()
