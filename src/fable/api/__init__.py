"""HTTP surface of the storefront.

``create_app`` assembles the FastAPI application. It expects the domain to be
initialized already; ``src/app.py`` does that before building the app.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from fable import config
from fable.api.admin import admin_router, admin_session_router
from fable.api.catalogue import product_router
from fable.api.identity import customer_router, profile_router
from fable.api.ordering import cart_router, order_router
from fable.domain import fable
from fable.utils.logging import add_context, clear_context

__all__ = [
    "create_app",
    "cart_router",
    "order_router",
    "product_router",
    "customer_router",
    "profile_router",
    "admin_router",
    "admin_session_router",
]


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors like any other invalid input."""
    return JSONResponse(status_code=400, content={"error": jsonable_encoder(exc.errors())})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Fable Apparels API",
        description="Storefront backend: catalogue, accounts, cart, checkout and orders",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Run every request inside the domain context, with its path bound to the log context."""
        add_context(method=request.method, path=request.url.path)
        try:
            with fable.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    register_exception_handlers(app)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    app.include_router(product_router)
    app.include_router(customer_router)
    app.include_router(profile_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(admin_session_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": fable.name})

    return app
