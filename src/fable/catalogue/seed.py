"""Starter catalogue loaded by ``manage.py seed-catalogue`` on an empty store."""

import json

from protean.utils.globals import current_domain

from fable.catalogue.management import CreateProduct
from fable.catalogue.product import Product

_PLACEHOLDER_IMAGE = "https://placehold.co/400x500.png"
_STANDARD_SIZES = ["S", "M", "L", "XL", "XXL"]

INITIAL_PRODUCTS = [
    {"name": "Monochrome Echo Tee", "price": 34.99, "category": "Oversized", "is_trending": True, "is_new": False},
    {"name": "Urban Canvas Hoodie", "price": 69.99, "category": "Hoodie", "is_trending": True, "is_new": False},
    {"name": "Shadow Stripe Long Sleeve", "price": 42.00, "category": "Full Sleeves", "is_trending": False, "is_new": True},
    {"name": "Minimalist Signature Tee", "price": 29.99, "category": "Half Sleeves", "is_trending": True, "is_new": True},
    {"name": "Fable-Knit Sweatshirt", "price": 55.50, "category": "Sweatshirt", "is_trending": False, "is_new": True},
    {"name": "Noir Essential Tee", "price": 28.00, "category": "Half Sleeves", "is_trending": False, "is_new": False},
]


def seed_catalogue() -> list[str]:
    """Create the starter products unless the catalogue already has entries."""
    if current_domain.repository_for(Product)._dao.query.all().items:
        return []

    product_ids = []
    for entry in INITIAL_PRODUCTS:
        command = CreateProduct(
            name=entry["name"],
            price=entry["price"],
            category=entry["category"],
            sizes=json.dumps(_STANDARD_SIZES),
            images=json.dumps([_PLACEHOLDER_IMAGE]),
            description=f"{entry['name']} from the Fable Apparels core collection.",
            details=json.dumps(["Relaxed fit", "Premium cotton blend"]),
            fabric_and_care="100% cotton. Machine wash cold, tumble dry low.",
            is_trending=entry["is_trending"],
            is_new=entry["is_new"],
        )
        product_ids.append(current_domain.process(command, asynchronous=False))
    return product_ids
