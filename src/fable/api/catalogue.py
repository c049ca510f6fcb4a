"""FastAPI endpoints for browsing products and their feedback."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from fable.api.auth import current_customer_id
from fable.api.schemas import (
    FeedbackIdResponse,
    FeedbackResponse,
    ProductFeedbackResponse,
    ProductResponse,
    SubmitFeedbackRequest,
)
from fable.catalogue.views import get_product, list_products
from fable.feedback.submission import SubmitFeedback
from fable.feedback.views import average_rating, feedback_for_product

product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse])
async def browse_products(
    category: str | None = None,
    trending: bool | None = None,
    new: bool | None = None,
    q: str | None = None,
) -> list[ProductResponse]:
    products = list_products(category=category, trending=trending, new=new, q=q)
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product_detail(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(get_product(product_id))


@product_router.get("/{product_id}/feedback", response_model=ProductFeedbackResponse)
async def product_feedback(product_id: str) -> ProductFeedbackResponse:
    get_product(product_id)
    entries = feedback_for_product(product_id)
    return ProductFeedbackResponse(
        items=[FeedbackResponse.from_feedback(entry) for entry in entries],
        average_rating=average_rating(entries),
        count=len(entries),
    )


@product_router.post("/{product_id}/feedback", status_code=201, response_model=FeedbackIdResponse)
async def submit_feedback(
    product_id: str, body: SubmitFeedbackRequest, customer_id: str = Depends(current_customer_id)
) -> FeedbackIdResponse:
    command = SubmitFeedback(
        product_id=product_id,
        customer_id=customer_id,
        rating=body.rating,
        comment=body.comment,
    )
    feedback_id = current_domain.process(command, asynchronous=False)
    return FeedbackIdResponse(feedback_id=feedback_id)
