"""Customer address update: command and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from customers.customer.customer import Address, Customer
from customers.customer.lookup import find_customer
from customers.domain import customers


@customers.command(part_of="Customer")
class UpdateCustomerAddress:
    """Replace the customer's address with a complete new one."""

    customer_id = Identifier(required=True)
    street = String(required=True, max_length=255)
    street_number = Integer(min_value=1)
    city = String(required=True, max_length=100)
    province = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=5)
    additional_info = String(max_length=500)


@customers.command_handler(part_of=Customer)
class UpdateCustomerAddressHandler:
    @handle(UpdateCustomerAddress)
    def update_address(self, command):
        customer = find_customer(command.customer_id)
        customer.change_address(
            Address(
                street=command.street,
                street_number=command.street_number,
                city=command.city,
                province=command.province,
                zip_code=command.zip_code,
                additional_info=command.additional_info,
            )
        )
        current_domain.repository_for(Customer).add(customer)
        return customer.snapshot()
