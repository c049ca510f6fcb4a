"""Read-side queries for carts and orders.

These never mutate state; they read aggregates straight from their
repositories and join catalogue data where the caller needs it for display.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from fable.catalogue.product import Product
from fable.ordering.cart.cart import ShoppingCart
from fable.ordering.order.order import Order, parse_status


def _product_summary(product):
    return {
        "id": str(product.id),
        "name": product.name,
        "price": product.price,
        "image": product.primary_image,
        "category": product.category,
        "sizes": product.size_list,
    }


def cart_contents(customer_id) -> dict:
    """The customer's cart with product data joined in.

    A customer without a cart gets the empty shape. Lines whose product has
    since been deleted are returned with ``product`` set to None and do not
    count towards the subtotal.
    """
    cart = current_domain.repository_for(ShoppingCart).for_customer(customer_id)
    if cart is None:
        return {"items": [], "subtotal": 0.0}

    product_repo = current_domain.repository_for(Product)
    items = []
    subtotal = 0.0
    for item in cart.ordered_items():
        try:
            product = _product_summary(product_repo.get(item.product_id))
            subtotal += product["price"] * item.quantity
        except ObjectNotFoundError:
            product = None
        items.append(
            {
                "product_id": str(item.product_id),
                "size": item.size,
                "quantity": item.quantity,
                "product": product,
            }
        )

    return {"items": items, "subtotal": round(subtotal, 2)}


def _newest_first(query):
    """All matching rows, newest first. The DAO caps results at 100 unless told otherwise."""
    return query.order_by("-created_at").limit(None).all().items


def orders_for_customer(customer_id) -> list[Order]:
    dao = current_domain.repository_for(Order)._dao
    return _newest_first(dao.query.filter(customer_id=str(customer_id)))


def order_for_customer(customer_id, order_id) -> Order:
    """Fetch one order, hiding orders that belong to somebody else."""
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.customer_id) != str(customer_id):
        raise ObjectNotFoundError(f"`Order` object with identifier {order_id} does not exist.")
    return order


def all_orders(status=None) -> list[Order]:
    query = current_domain.repository_for(Order)._dao.query
    if status:
        query = query.filter(status=parse_status(status).value)
    return _newest_first(query)
