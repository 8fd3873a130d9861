"""Customer lookups shared by the cart and customer operations."""

import math

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from customers.customer.customer import Customer


def find_customer(customer_id) -> Customer:
    """Return the customer or raise ObjectNotFoundError."""
    try:
        return current_domain.repository_for(Customer).get(customer_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"customer": [f"Customer #{customer_id} not found"]}) from None


def find_customer_by_email(email) -> Customer:
    dao = current_domain.repository_for(Customer)._dao
    matches = dao.query.filter(email=email).all().items
    if not matches:
        raise ObjectNotFoundError({"email": [f"Customer with email {email} not found"]})
    return matches[0]


def email_in_use(email) -> bool:
    dao = current_domain.repository_for(Customer)._dao
    return bool(dao.query.filter(email=email).all().items)


def list_customers(page=1, limit=10):
    """Return one page of customers with paging metadata.

    Raises ObjectNotFoundError when no customer exists at all.
    """
    dao = current_domain.repository_for(Customer)._dao
    total = dao.query.all().total
    if not total:
        raise ObjectNotFoundError({"customers": ["No customers found."]})

    page_of_customers = dao.query.order_by("created_at").offset((page - 1) * limit).limit(limit).all().items
    return {
        "data": page_of_customers,
        "meta": {
            "total": total,
            "page": page,
            "last_page": math.ceil(total / limit),
        },
    }
