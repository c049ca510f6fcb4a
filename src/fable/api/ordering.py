"""FastAPI endpoints for the cart and the customer's orders."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from fable.api.auth import current_customer_id
from fable.api.schemas import (
    AddToCartRequest,
    CartResponse,
    OrderIdResponse,
    OrderResponse,
    PlaceOrderRequest,
    RemoveFromCartRequest,
    SetCartQuantityRequest,
)
from fable.ordering.cart.items import AddToCart, RemoveFromCart, SetCartQuantity
from fable.ordering.order.checkout import PlaceOrder
from fable.ordering.views import cart_contents, order_for_customer, orders_for_customer

cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("", response_model=CartResponse)
async def get_cart(customer_id: str = Depends(current_customer_id)) -> CartResponse:
    return CartResponse(**cart_contents(customer_id))


@cart_router.post("", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, customer_id: str = Depends(current_customer_id)) -> CartResponse:
    command = AddToCart(
        customer_id=customer_id,
        product_id=body.product_id,
        size=body.size,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse(**cart_contents(customer_id))


@cart_router.put("", response_model=CartResponse)
async def set_cart_quantity(
    body: SetCartQuantityRequest, customer_id: str = Depends(current_customer_id)
) -> CartResponse:
    command = SetCartQuantity(
        customer_id=customer_id,
        product_id=body.product_id,
        size=body.size,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse(**cart_contents(customer_id))


@cart_router.delete("", response_model=CartResponse)
async def remove_from_cart(
    body: RemoveFromCartRequest, customer_id: str = Depends(current_customer_id)
) -> CartResponse:
    command = RemoveFromCart(customer_id=customer_id, product_id=body.product_id, size=body.size)
    current_domain.process(command, asynchronous=False)
    return CartResponse(**cart_contents(customer_id))


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest, customer_id: str = Depends(current_customer_id)) -> OrderIdResponse:
    command = PlaceOrder(customer_id=customer_id, address_id=body.address_id)
    order_id = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=order_id)


@order_router.get("", response_model=list[OrderResponse])
async def list_my_orders(customer_id: str = Depends(current_customer_id)) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in orders_for_customer(customer_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_my_order(order_id: str, customer_id: str = Depends(current_customer_id)) -> OrderResponse:
    return OrderResponse.from_order(order_for_customer(customer_id, order_id))
