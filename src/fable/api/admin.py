"""FastAPI endpoints for store administration."""

import hmac
import json

from fastapi import APIRouter, Depends, HTTPException, Response
from protean.utils.globals import current_domain

from fable import config
from fable.api.auth import ADMIN_COOKIE, require_admin, set_session_cookie
from fable.api.schemas import (
    AdminLoginRequest,
    AdminSessionResponse,
    CreateProductRequest,
    FeedbackResponse,
    OrderResponse,
    ProductIdResponse,
    StatusResponse,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from fable.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct
from fable.feedback.submission import DeleteFeedback
from fable.feedback.views import all_feedback
from fable.identity.session import ADMIN_ROLE, issue_token
from fable.ordering.order.order import Order
from fable.ordering.order.status import UpdateOrderStatus
from fable.ordering.views import all_orders
from fable.utils.logging import get_logger

logger = get_logger(__name__)

admin_session_router = APIRouter(prefix="/admin", tags=["admin"])
admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _dump_list(values):
    return json.dumps(values) if values is not None else None


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------
@admin_session_router.post("/login", response_model=AdminSessionResponse)
async def admin_login(body: AdminLoginRequest, response: Response) -> AdminSessionResponse:
    credentials = config.admin_credentials()
    if credentials is None:
        logger.error("admin_login_unconfigured")
        raise HTTPException(status_code=500, detail="Admin credentials are not configured")

    username, password = credentials
    username_ok = hmac.compare_digest(body.username.encode("utf-8"), username.encode("utf-8"))
    password_ok = hmac.compare_digest(body.password.encode("utf-8"), password.encode("utf-8"))
    if not (username_ok and password_ok):
        logger.warning("admin_login_failed", username=body.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = issue_token(username, role=ADMIN_ROLE)
    set_session_cookie(response, ADMIN_COOKIE, token)
    logger.info("admin_logged_in", username=username)
    return AdminSessionResponse(token=token)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@admin_router.post("/products", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        price=body.price,
        category=body.category,
        sizes=json.dumps(body.sizes),
        images=json.dumps(body.images),
        description=body.description,
        details=json.dumps(body.details),
        fabric_and_care=body.fabric_and_care,
        is_trending=body.is_trending,
        is_new=body.is_new,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=product_id)


@admin_router.put("/products/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        price=body.price,
        category=body.category,
        sizes=_dump_list(body.sizes),
        images=_dump_list(body.images),
        description=body.description,
        details=_dump_list(body.details),
        fabric_and_care=body.fabric_and_care,
        is_trending=body.is_trending,
        is_new=body.is_new,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.delete("/products/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@admin_router.get("/orders", response_model=list[OrderResponse])
async def list_orders(status: str | None = None) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in all_orders(status=status)]


@admin_router.put("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------
@admin_router.get("/feedback", response_model=list[FeedbackResponse])
async def list_feedback() -> list[FeedbackResponse]:
    return [FeedbackResponse.from_feedback(entry) for entry in all_feedback()]


@admin_router.delete("/feedback/{feedback_id}", response_model=StatusResponse)
async def delete_feedback(feedback_id: str) -> StatusResponse:
    current_domain.process(DeleteFeedback(feedback_id=feedback_id), asynchronous=False)
    return StatusResponse()
