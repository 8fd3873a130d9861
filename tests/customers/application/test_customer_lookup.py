"""Application tests for customer lookups and paging."""

import pytest
from protean.exceptions import ObjectNotFoundError

from customers.customer.lookup import (
    email_in_use,
    find_customer,
    find_customer_by_email,
    list_customers,
)


class TestFindCustomer:
    def test_by_id(self, create_customer):
        create_customer("cust-001")
        assert find_customer("cust-001").id == "cust-001"

    def test_unknown_id(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            find_customer("cust-404")
        assert "Customer #cust-404 not found" in str(exc.value.messages)

    def test_by_email(self, create_customer):
        create_customer("cust-001", email="ana@example.com")
        assert find_customer_by_email("ana@example.com").id == "cust-001"

    def test_unknown_email(self):
        with pytest.raises(ObjectNotFoundError):
            find_customer_by_email("nobody@example.com")

    def test_email_in_use(self, create_customer):
        create_customer("cust-001", email="ana@example.com")
        assert email_in_use("ana@example.com") is True
        assert email_in_use("luis@example.com") is False


class TestListCustomers:
    def test_no_customers_is_not_found(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            list_customers()
        assert "No customers found." in str(exc.value.messages)

    def test_first_page_with_defaults(self, create_customer):
        for n in range(3):
            create_customer(f"cust-00{n}")

        page = list_customers()

        assert len(page["data"]) == 3
        assert page["meta"] == {"total": 3, "page": 1, "last_page": 1}

    def test_paging(self, create_customer):
        for n in range(5):
            create_customer(f"cust-00{n}")

        first = list_customers(page=1, limit=2)
        last = list_customers(page=3, limit=2)

        assert len(first["data"]) == 2
        assert len(last["data"]) == 1
        assert first["meta"] == {"total": 5, "page": 1, "last_page": 3}
        assert last["meta"]["page"] == 3

    def test_page_past_the_end_is_empty(self, create_customer):
        create_customer("cust-001")

        page = list_customers(page=4, limit=10)
        assert page["data"] == []
        assert page["meta"]["total"] == 1
