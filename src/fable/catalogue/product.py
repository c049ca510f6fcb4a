"""Product aggregate: the apparel catalogue that carts and orders read from.

List-valued attributes (sizes, images, detail bullet points) are stored as
JSON text so that every provider can persist them in a single column.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String, Text

from fable.catalogue.events import ProductCreated, ProductUpdated
from fable.domain import fable


class Category(Enum):
    OVERSIZED = "Oversized"
    HOODIE = "Hoodie"
    FULL_SLEEVES = "Full Sleeves"
    HALF_SLEEVES = "Half Sleeves"
    SWEATSHIRT = "Sweatshirt"


_UPDATABLE_FIELDS = (
    "name",
    "price",
    "category",
    "sizes",
    "images",
    "description",
    "details",
    "fabric_and_care",
    "is_trending",
    "is_new",
)


def _clean_list(values) -> list[str]:
    """Strip entries, drop blanks and duplicates, keep the original order."""
    cleaned = []
    for value in values or []:
        value = str(value).strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


def _load_list(raw) -> list[str]:
    if not raw:
        return []
    return json.loads(raw) if isinstance(raw, str) else list(raw)


def _validate(name, price, sizes, images, description):
    errors = {}
    if name is not None and len(name.strip()) < 3:
        errors["name"] = ["Product name must be at least 3 characters"]
    if price is not None and price <= 0:
        errors["price"] = ["Price must be greater than 0"]
    if sizes is not None and not sizes:
        errors["sizes"] = ["At least one size must be selected"]
    if images is not None and not images:
        errors["images"] = ["At least one image URL is required"]
    if description is not None and len(description.strip()) < 10:
        errors["description"] = ["Description must be at least 10 characters"]
    if errors:
        raise ValidationError(errors)


@fable.aggregate
class Product:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.01)
    category = String(required=True, choices=Category)
    sizes = Text(required=True)  # JSON array of size labels
    images = Text(required=True)  # JSON array of image URLs
    description = Text(required=True)
    details = Text()  # JSON array of bullet points
    fabric_and_care = Text()
    is_trending = Boolean(default=False)
    is_new = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(
        cls,
        name,
        price,
        category,
        sizes,
        images,
        description,
        details=None,
        fabric_and_care=None,
        is_trending=False,
        is_new=False,
    ):
        sizes = _clean_list(sizes)
        images = _clean_list(images)
        _validate(name, price, sizes, images, description)

        now = datetime.now(UTC)
        product = cls(
            name=name.strip(),
            price=round(float(price), 2),
            category=category,
            sizes=json.dumps(sizes),
            images=json.dumps(images),
            description=description.strip(),
            details=json.dumps(_clean_list(details)),
            fabric_and_care=fabric_and_care,
            is_trending=bool(is_trending),
            is_new=bool(is_new),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                category=product.category,
                created_at=now,
            )
        )
        return product

    def update(self, **changes):
        """Overwrite the given catalogue fields; unknown keys and None values are ignored."""
        changes = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS and v is not None}
        if not changes:
            return

        for list_field in ("sizes", "images", "details"):
            if list_field in changes:
                changes[list_field] = _clean_list(changes[list_field])

        _validate(
            changes.get("name"),
            changes.get("price"),
            changes.get("sizes"),
            changes.get("images"),
            changes.get("description"),
        )

        for field, value in changes.items():
            if field in ("sizes", "images", "details"):
                value = json.dumps(value)
            elif field == "price":
                value = round(float(value), 2)
            elif field in ("name", "description"):
                value = value.strip()
            setattr(self, field, value)

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                changed_fields=json.dumps(sorted(changes)),
                price=self.price,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    @property
    def size_list(self) -> list[str]:
        return _load_list(self.sizes)

    @property
    def image_list(self) -> list[str]:
        return _load_list(self.images)

    @property
    def detail_list(self) -> list[str]:
        return _load_list(self.details)

    @property
    def primary_image(self) -> str | None:
        images = self.image_list
        return images[0] if images else None

    def offers_size(self, size) -> bool:
        return size in self.size_list
