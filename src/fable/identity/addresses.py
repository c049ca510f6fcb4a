"""Address book management: commands and handler.

Every command carries the customer id taken from the verified session, so a
customer can only ever touch their own address book.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from fable.domain import fable
from fable.identity.customer import Customer


@fable.command(part_of="Customer")
class AddAddress:
    customer_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    line1 = String(required=True, max_length=255)
    line2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100)
    phone = String(max_length=20)


@fable.command(part_of="Customer")
class UpdateAddress:
    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    name = String(max_length=100)
    line1 = String(max_length=255)
    line2 = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)
    phone = String(max_length=20)


@fable.command(part_of="Customer")
class RemoveAddress:
    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)


@fable.command_handler(part_of=Customer)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        address = customer.add_address(
            name=command.name,
            line1=command.line1,
            line2=command.line2,
            city=command.city,
            state=command.state,
            zip_code=command.zip_code,
            country=command.country,
            phone=command.phone,
        )
        repo.add(customer)
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)

        updates = {}
        for field in ("name", "line1", "line2", "city", "state", "zip_code", "country", "phone"):
            value = getattr(command, field, None)
            if value is not None:
                updates[field] = value

        customer.update_address(command.address_id, **updates)
        repo.add(customer)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.remove_address(command.address_id)
        repo.add(customer)
