"""Domain events for the Customer aggregate."""

from protean.fields import DateTime, Identifier, String

from fable.domain import fable


@fable.event(part_of="Customer")
class CustomerRegistered:
    __version__ = 1

    customer_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    phone = String(required=True, max_length=20)
    email = String(max_length=254)
    registered_at = DateTime(required=True)


@fable.event(part_of="Customer")
class AddressAdded:
    __version__ = 1

    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    city = String(max_length=100)
    zip_code = String(max_length=20)


@fable.event(part_of="Customer")
class AddressUpdated:
    __version__ = 1

    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)


@fable.event(part_of="Customer")
class AddressRemoved:
    __version__ = 1

    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
