"""Application tests for registration and address book commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from fable.identity.addresses import RemoveAddress, UpdateAddress
from fable.identity.customer import Customer
from fable.identity.registration import RegisterCustomer


class TestRegisterCustomerCommand:
    def test_register_persists(self):
        customer_id = current_domain.process(
            RegisterCustomer(name="Asha Rao", phone="+91-98450-00001", email="asha@example.com"),
            asynchronous=False,
        )
        customer = current_domain.repository_for(Customer).get(customer_id)
        assert customer.phone == "+91-98450-00001"

    def test_duplicate_phone_rejected(self, make_customer):
        make_customer(phone="+91-98450-00001")
        with pytest.raises(ValidationError) as exc:
            make_customer(phone="+91-98450-00001")
        assert "phone" in exc.value.messages

    def test_duplicate_email_rejected(self, make_customer):
        make_customer(email="asha@example.com")
        with pytest.raises(ValidationError) as exc:
            make_customer(email="asha@example.com")
        assert "email" in exc.value.messages


class TestAddressCommands:
    def test_add_address(self, make_customer, make_address):
        customer_id = make_customer()
        address_id = make_address(customer_id)

        customer = current_domain.repository_for(Customer).get(customer_id)
        assert len(customer.addresses) == 1
        assert str(customer.addresses[0].id) == address_id

    def test_update_address(self, make_customer, make_address):
        customer_id = make_customer()
        address_id = make_address(customer_id)

        current_domain.process(
            UpdateAddress(customer_id=customer_id, address_id=address_id, city="Mysuru"),
            asynchronous=False,
        )
        customer = current_domain.repository_for(Customer).get(customer_id)
        assert customer.find_address(address_id).city == "Mysuru"

    def test_update_address_clears_optional_fields(self, make_customer, make_address):
        customer_id = make_customer()
        address_id = make_address(customer_id, line2="Near Metro", phone="+91-98450-11111")

        current_domain.process(
            UpdateAddress(customer_id=customer_id, address_id=address_id, line2="", phone=""),
            asynchronous=False,
        )
        address = current_domain.repository_for(Customer).get(customer_id).find_address(address_id)
        assert address.line2 is None
        assert address.phone is None
        assert address.line1 == "12 MG Road"

    def test_remove_address(self, make_customer, make_address):
        customer_id = make_customer()
        address_id = make_address(customer_id)

        current_domain.process(RemoveAddress(customer_id=customer_id, address_id=address_id), asynchronous=False)
        customer = current_domain.repository_for(Customer).get(customer_id)
        assert customer.addresses == []

    def test_cannot_touch_another_customers_address(self, make_customer, make_address):
        owner_id = make_customer()
        other_id = make_customer()
        address_id = make_address(owner_id)

        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveAddress(customer_id=other_id, address_id=address_id), asynchronous=False)
