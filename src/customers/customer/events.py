"""Domain events for the Customer aggregate."""

from protean.fields import DateTime, Identifier, String

from customers.domain import customers


@customers.event(part_of="Customer")
class CustomerCreated:
    """A customer record and its empty cart were created."""

    __version__ = 1

    customer_id = Identifier(required=True)
    email = String(required=True)
    created_at = DateTime(required=True)


@customers.event(part_of="Customer")
class CustomerAddressUpdated:
    """The customer's postal address was replaced."""

    __version__ = 1

    customer_id = Identifier(required=True)
    street = String(required=True)
    city = String(required=True)
    province = String(required=True)
    zip_code = String(required=True)
    updated_at = DateTime(required=True)


@customers.event(part_of="Customer")
class CustomerDeleted:
    """The customer record and its cart were deleted."""

    __version__ = 1

    customer_id = Identifier(required=True)
    email = String(required=True)
    deleted_at = DateTime(required=True)
