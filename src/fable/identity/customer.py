"""Customer aggregate root with the Address entity that makes up the address book.

Orders never reference an Address; checkout copies its fields into the order,
so editing or removing an address here leaves placed orders untouched.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, String

from fable.domain import fable
from fable.identity.events import AddressAdded, AddressRemoved, AddressUpdated, CustomerRegistered

MAX_ADDRESSES = 10

_ADDRESS_FIELDS = ("name", "line1", "line2", "city", "state", "zip_code", "country", "phone")
_CLEARABLE_FIELDS = ("line2", "phone")


@fable.entity(part_of="Customer")
class Address:
    name = String(required=True, max_length=100)
    line1 = String(required=True, max_length=255)
    line2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100, default="India")
    phone = String(max_length=20)

    def snapshot(self) -> dict:
        """Plain-value copy of the address, suitable for embedding in an order."""
        return {field: getattr(self, field) for field in _ADDRESS_FIELDS}


@fable.aggregate
class Customer:
    """A registered shopper, identified by phone number."""

    name = String(required=True, max_length=100)
    phone = String(required=True, max_length=20)
    email = String(max_length=254)
    addresses = HasMany(Address)
    registered_at = DateTime()

    @invariant.post
    def addresses_cannot_exceed_maximum(self):
        if len(self.addresses) > MAX_ADDRESSES:
            raise ValidationError({"addresses": [f"Cannot have more than {MAX_ADDRESSES} addresses"]})

    @classmethod
    def register(cls, name, phone, email=None):
        now = datetime.now(UTC)
        customer = cls(
            name=name.strip(),
            phone=phone.strip(),
            email=email.strip().lower() if email else None,
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                name=customer.name,
                phone=customer.phone,
                email=customer.email,
                registered_at=now,
            )
        )
        return customer

    # -------------------------------------------------------------------
    # Address book
    # -------------------------------------------------------------------
    def find_address(self, address_id):
        return next((a for a in self.addresses if str(a.id) == str(address_id)), None)

    def _require_address(self, address_id):
        address = self.find_address(address_id)
        if address is None:
            raise ObjectNotFoundError(f"Address `{address_id}` not found")
        return address

    def add_address(self, name, line1, city, state, zip_code, country=None, line2=None, phone=None):
        address = Address(
            name=name,
            line1=line1,
            line2=line2,
            city=city,
            state=state,
            zip_code=zip_code,
            country=country or "India",
            phone=phone,
        )
        self.add_addresses(address)

        self.raise_(AddressAdded(customer_id=str(self.id), address_id=str(address.id), city=city, zip_code=zip_code))
        return address

    def update_address(self, address_id, **changes):
        """Apply the given field changes. An empty string clears ``line2`` or ``phone``."""
        address = self._require_address(address_id)

        for field, value in changes.items():
            if field not in _ADDRESS_FIELDS or value is None:
                continue
            if field in _CLEARABLE_FIELDS and value == "":
                value = None
            setattr(address, field, value)

        self.raise_(AddressUpdated(customer_id=str(self.id), address_id=str(address_id)))

    def remove_address(self, address_id):
        address = self._require_address(address_id)
        self.remove_addresses(address)

        self.raise_(AddressRemoved(customer_id=str(self.id), address_id=str(address_id)))
