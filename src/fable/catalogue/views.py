"""Read-side catalogue queries."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from fable.catalogue.product import Category, Product


def list_products(category=None, trending=None, new=None, q=None) -> list[Product]:
    """Products newest first, optionally narrowed by category, flags and a name search."""
    filters = {}
    if category:
        try:
            filters["category"] = Category(category).value
        except ValueError:
            raise ValidationError({"category": [f"Unknown category '{category}'"]}) from None
    if trending is not None:
        filters["is_trending"] = trending
    if new is not None:
        filters["is_new"] = new

    query = current_domain.repository_for(Product)._dao.query
    if filters:
        query = query.filter(**filters)
    products = query.order_by("-created_at").limit(None).all().items

    if q:
        needle = q.strip().lower()
        products = [p for p in products if needle in p.name.lower()]

    return products


def get_product(product_id) -> Product:
    return current_domain.repository_for(Product).get(product_id)
