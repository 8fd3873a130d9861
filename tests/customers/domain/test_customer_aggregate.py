"""Tests for the Customer aggregate and its Address value object."""

import pytest
from protean.exceptions import ValidationError

from customers.customer.customer import Address, Customer
from customers.customer.email import EmailAddress
from customers.customer.events import CustomerAddressUpdated, CustomerCreated, CustomerDeleted


def _address(**overrides):
    fields = {
        "street": "Calle Mayor",
        "street_number": 5,
        "city": "Madrid",
        "province": "Madrid",
        "zip_code": "28013",
    }
    fields.update(overrides)
    return Address(**fields)


class TestAddress:
    def test_valid_address(self):
        address = _address(additional_info="3º B")
        assert address.zip_code == "28013"
        assert address.additional_info == "3º B"

    @pytest.mark.parametrize("zip_code", ["00123", "01001", "52006", "41001"])
    def test_accepts_spanish_postal_codes(self, zip_code):
        assert _address(zip_code=zip_code).zip_code == zip_code

    @pytest.mark.parametrize("zip_code", ["53001", "99999", "2801", "ABCDE", "2801\n"])
    def test_rejects_other_postal_codes(self, zip_code):
        with pytest.raises(ValidationError):
            _address(zip_code=zip_code)

    def test_street_is_required(self):
        with pytest.raises(ValidationError):
            Address(city="Madrid", province="Madrid", zip_code="28013")

    def test_street_number_must_be_positive(self):
        with pytest.raises(ValidationError):
            _address(street_number=0)


class TestCustomerCreation:
    def test_create_keeps_supplied_id(self):
        customer = Customer.create(customer_id="cust-001", email="ana@example.com", address=_address())

        assert customer.id == "cust-001"
        assert customer.email == "ana@example.com"
        assert customer.created_at == customer.updated_at

    def test_create_raises_customer_created(self):
        customer = Customer.create(customer_id="cust-001", email="ana@example.com", address=_address())

        assert len(customer._events) == 1
        event = customer._events[0]
        assert isinstance(event, CustomerCreated)
        assert event.customer_id == "cust-001"
        assert event.email == "ana@example.com"

    def test_address_is_required(self):
        with pytest.raises(ValidationError):
            Customer(id="cust-001", email="ana@example.com")

    def test_snapshot(self):
        customer = Customer.create(customer_id="cust-001", email="ana@example.com", address=_address())

        snapshot = customer.snapshot()
        assert snapshot["id"] == "cust-001"
        assert snapshot["email"] == "ana@example.com"
        assert snapshot["address"]["street"] == "Calle Mayor"
        assert snapshot["address"]["zip_code"] == "28013"
        assert snapshot["address"]["additional_info"] is None


class TestChangeAddress:
    def test_replaces_the_whole_address(self):
        customer = Customer.create(
            customer_id="cust-001",
            email="ana@example.com",
            address=_address(additional_info="Portal 2"),
        )

        customer.change_address(_address(street="Gran Vía", zip_code="28004"))

        assert customer.address.street == "Gran Vía"
        assert customer.address.zip_code == "28004"
        assert customer.address.additional_info is None

    def test_raises_address_updated(self):
        customer = Customer.create(customer_id="cust-001", email="ana@example.com", address=_address())

        customer.change_address(_address(city="Sevilla", province="Sevilla", zip_code="41001"))

        event = customer._events[-1]
        assert isinstance(event, CustomerAddressUpdated)
        assert event.city == "Sevilla"
        assert event.zip_code == "41001"


class TestMarkDeleted:
    def test_raises_customer_deleted(self):
        customer = Customer.create(customer_id="cust-001", email="ana@example.com", address=_address())

        customer.mark_deleted()

        event = customer._events[-1]
        assert isinstance(event, CustomerDeleted)
        assert event.customer_id == "cust-001"
        assert event.email == "ana@example.com"


class TestEmailAddress:
    @pytest.mark.parametrize("email", ["ana@example.com", "ana+food@mail.example.es", "a.b-c@sub.example.org"])
    def test_accepts_valid_addresses(self, email):
        assert EmailAddress(address=email).address == email

    @pytest.mark.parametrize(
        "email",
        [
            "not-an-email",
            "ana@@example.com",
            "ana@example",
            ".ana@example.com",
            "ana..b@example.com",
            "ana@-example.com",
            "ana @example.com",
            "ana;b@example.com",
        ],
    )
    def test_rejects_malformed_addresses(self, email):
        with pytest.raises(ValidationError):
            EmailAddress(address=email)

    def test_customer_rejects_malformed_email(self):
        with pytest.raises(ValidationError) as exc:
            Customer.create(customer_id="cust-001", email="ana.example.com", address=_address())
        assert "not a valid email address" in str(exc.value.messages)
