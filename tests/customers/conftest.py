import os

import pytest


@pytest.fixture(scope="session")
def _customers_domain(request):
    """Initialize the customers domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from customers.domain import customers

    customers.init()
    return customers


@pytest.fixture(scope="session", autouse=True)
def setup_db(_customers_domain):
    from customers.utils.db import drop_db, setup_db

    setup_db(_customers_domain)

    yield

    drop_db(_customers_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_customers_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _customers_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def address_fields():
    return {
        "street": "Calle Mayor",
        "street_number": 5,
        "city": "Madrid",
        "province": "Madrid",
        "zip_code": "28013",
    }


@pytest.fixture()
def create_customer(address_fields):
    """Factory: register a customer (and its empty cart) through the domain."""
    from protean import current_domain

    from customers.customer.registration import CreateCustomer

    def _create(customer_id="cust-001", email=None, **overrides):
        fields = {**address_fields, **overrides}
        return current_domain.process(
            CreateCustomer(
                customer_id=customer_id,
                email=email or f"{customer_id}@example.com",
                **fields,
            ),
            asynchronous=False,
        )

    return _create
