"""Customer aggregate root with its embedded Address value object."""

import re
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, ValueObject

from customers.customer.email import EmailAddress
from customers.customer.events import CustomerAddressUpdated, CustomerCreated, CustomerDeleted
from customers.domain import customers

# Spanish postal codes: five digits with a 00-52 prefix.
_POSTAL_CODE = re.compile(r"^(5[0-2]|[0-4]\d)\d{3}$")


@customers.value_object(part_of="Customer")
class Address:
    """Delivery address of a customer.

    Replaced wholesale on update, never edited field by field.
    """

    street = String(required=True, max_length=255)
    street_number = Integer(min_value=1)
    city = String(required=True, max_length=100)
    province = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=5)
    additional_info = String(max_length=500)

    @invariant.post
    def zip_code_must_be_a_postal_code(self):
        if self.zip_code is not None and not _POSTAL_CODE.fullmatch(self.zip_code):
            raise ValidationError({"zip_code": [f"{self.zip_code} is not a valid postal code"]})


@customers.aggregate
class Customer:
    """A person who can order dishes, identified by a caller-supplied id.

    The id is assigned by the authentication service, so it is never
    generated here. Email addresses are unique across customers.
    """

    id = Identifier(identifier=True)
    email = String(required=True, max_length=254, unique=True)
    address = ValueObject(Address, required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def email_must_be_an_address(self):
        if self.email is not None:
            EmailAddress(address=self.email)

    @classmethod
    def create(cls, customer_id, email, address):
        now = datetime.now(UTC)
        customer = cls(
            id=customer_id,
            email=email,
            address=address,
            created_at=now,
            updated_at=now,
        )
        customer.raise_(
            CustomerCreated(
                customer_id=customer.id,
                email=email,
                created_at=now,
            )
        )
        return customer

    def snapshot(self):
        address = self.address
        return {
            "id": str(self.id),
            "email": self.email,
            "address": {
                "street": address.street,
                "street_number": address.street_number,
                "city": address.city,
                "province": address.province,
                "zip_code": address.zip_code,
                "additional_info": address.additional_info,
            },
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def change_address(self, address):
        now = datetime.now(UTC)
        self.address = address
        self.updated_at = now

        self.raise_(
            CustomerAddressUpdated(
                customer_id=self.id,
                street=address.street,
                city=address.city,
                province=address.province,
                zip_code=address.zip_code,
                updated_at=now,
            )
        )

    def mark_deleted(self):
        self.raise_(
            CustomerDeleted(
                customer_id=self.id,
                email=self.email,
                deleted_at=datetime.now(UTC),
            )
        )
