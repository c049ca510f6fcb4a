"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from fable.domain import fable


@fable.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True)
    category = String(required=True, max_length=50)
    created_at = DateTime(required=True)


@fable.event(part_of="Product")
class ProductUpdated:
    """Catalogue fields of a product were changed by an admin."""

    __version__ = 1

    product_id = Identifier(required=True)
    changed_fields = Text(required=True)  # JSON: list of field names
    price = Float(required=True)
    updated_at = DateTime(required=True)
