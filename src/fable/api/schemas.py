"""Pydantic request/response schemas for the storefront API.

These are the external contracts. JSON keys are camelCase on the wire and
snake_case in Python; both spellings are accepted on input.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(CamelModel):
    status: str = "ok"


class AddressFields(CamelModel):
    name: str
    line1: str
    line2: str | None = None
    city: str
    state: str
    zip_code: str
    country: str | None = None
    phone: str | None = None


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CreateProductRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Skyline Oversized Tee",
                    "price": 799.0,
                    "category": "Oversized",
                    "sizes": ["S", "M", "L", "XL"],
                    "images": ["https://cdn.example.com/skyline-front.jpg"],
                    "description": "Heavyweight cotton tee with a relaxed drop-shoulder fit.",
                    "details": ["240 GSM", "Drop shoulder"],
                    "fabricAndCare": "100% cotton. Machine wash cold.",
                    "isTrending": True,
                    "isNew": True,
                }
            ]
        },
    )

    name: str
    price: float
    category: str
    sizes: list[str]
    images: list[str]
    description: str
    details: list[str] = []
    fabric_and_care: str | None = None
    is_trending: bool = False
    is_new: bool = False


class UpdateProductRequest(CamelModel):
    name: str | None = None
    price: float | None = None
    category: str | None = None
    sizes: list[str] | None = None
    images: list[str] | None = None
    description: str | None = None
    details: list[str] | None = None
    fabric_and_care: str | None = None
    is_trending: bool | None = None
    is_new: bool | None = None


class ProductIdResponse(CamelModel):
    product_id: str


class ProductResponse(CamelModel):
    id: str
    name: str
    price: float
    category: str
    sizes: list[str]
    images: list[str]
    description: str
    details: list[str]
    fabric_and_care: str | None = None
    is_trending: bool
    is_new: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            price=product.price,
            category=product.category,
            sizes=product.size_list,
            images=product.image_list,
            description=product.description,
            details=product.detail_list,
            fabric_and_care=product.fabric_and_care,
            is_trending=bool(product.is_trending),
            is_new=bool(product.is_new),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------
class RegisterCustomerRequest(CamelModel):
    name: str
    phone: str
    email: str | None = None


class CustomerSessionResponse(CamelModel):
    customer_id: str
    token: str


class AddAddressRequest(AddressFields):
    pass


class UpdateAddressRequest(CamelModel):
    name: str | None = None
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    phone: str | None = None

    def changes(self) -> dict:
        """Fields the client sent. Sending null or "" for ``line2`` or ``phone`` clears it."""
        sent = self.model_dump(exclude_unset=True)
        changes = {}
        for field, value in sent.items():
            if field in ("line2", "phone") and not value:
                changes[field] = ""
            elif value is not None:
                changes[field] = value
        return changes


class AddressIdResponse(CamelModel):
    address_id: str


class AddressResponse(AddressFields):
    id: str


class ProfileResponse(CamelModel):
    id: str
    name: str
    phone: str
    email: str | None = None
    addresses: list[AddressResponse]

    @classmethod
    def from_customer(cls, customer) -> "ProfileResponse":
        return cls(
            id=str(customer.id),
            name=customer.name,
            phone=customer.phone,
            email=customer.email,
            addresses=[AddressResponse(id=str(a.id), **a.snapshot()) for a in customer.addresses],
        )


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------
class AdminLoginRequest(CamelModel):
    username: str
    password: str


class AdminSessionResponse(CamelModel):
    token: str


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(CamelModel):
    product_id: str
    size: str
    quantity: int = 1


class SetCartQuantityRequest(CamelModel):
    # Lower bound is enforced by the domain so that it surfaces as a 400
    product_id: str
    size: str
    quantity: int


class RemoveFromCartRequest(CamelModel):
    product_id: str
    size: str


class CartProductSummary(CamelModel):
    id: str
    name: str
    price: float
    image: str | None = None
    category: str
    sizes: list[str]


class CartLineResponse(CamelModel):
    product_id: str
    size: str
    quantity: int
    product: CartProductSummary | None = None


class CartResponse(CamelModel):
    items: list[CartLineResponse]
    subtotal: float


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(CamelModel):
    address_id: str


class OrderIdResponse(CamelModel):
    order_id: str


class UpdateOrderStatusRequest(CamelModel):
    status: str


class OrderItemResponse(CamelModel):
    product_id: str
    name: str
    image: str | None = None
    size: str
    quantity: int
    price: float


class ShippingAddressResponse(AddressFields):
    pass


class OrderResponse(CamelModel):
    id: str
    customer_id: str
    items: list[OrderItemResponse]
    total_amount: float
    status: str
    shipping_address: ShippingAddressResponse
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        address = order.shipping_address
        return cls(
            id=str(order.id),
            customer_id=str(order.customer_id),
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    image=item.image,
                    size=item.size,
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.ordered_items()
            ],
            total_amount=order.total_amount,
            status=order.status,
            shipping_address=ShippingAddressResponse(
                name=address.name,
                line1=address.line1,
                line2=address.line2,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
                phone=address.phone,
            ),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------
class SubmitFeedbackRequest(CamelModel):
    rating: int
    comment: str


class FeedbackIdResponse(CamelModel):
    feedback_id: str


class FeedbackResponse(CamelModel):
    id: str
    product_id: str
    customer_id: str
    customer_name: str
    rating: int
    comment: str
    created_at: datetime | None = None

    @classmethod
    def from_feedback(cls, feedback) -> "FeedbackResponse":
        return cls(
            id=str(feedback.id),
            product_id=str(feedback.product_id),
            customer_id=str(feedback.customer_id),
            customer_name=feedback.customer_name,
            rating=feedback.rating,
            comment=feedback.comment,
            created_at=feedback.created_at,
        )


class ProductFeedbackResponse(CamelModel):
    items: list[FeedbackResponse]
    average_rating: float | None = None
    count: int
