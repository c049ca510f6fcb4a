"""Session dependencies for the storefront routes.

Customers authenticate with the ``token`` cookie, admins with the
``admin-token`` cookie. Either may instead send ``Authorization: Bearer``.
"""

from fastapi import HTTPException, Request, Response

from fable import config
from fable.identity.session import (
    ADMIN_ROLE,
    CUSTOMER_ROLE,
    InvalidSessionToken,
    SessionClaims,
    verify_token,
)
from fable.utils.logging import get_logger

logger = get_logger(__name__)

CUSTOMER_COOKIE = "token"
ADMIN_COOKIE = "admin-token"


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def _claims(request: Request, cookie_name: str) -> SessionClaims:
    token = _bearer_token(request) or request.cookies.get(cookie_name)
    try:
        return verify_token(token)
    except InvalidSessionToken as exc:
        logger.info("session_rejected", path=request.url.path, reason=str(exc))
        raise HTTPException(status_code=401, detail="Unauthorized") from None


def current_customer_id(request: Request) -> str:
    """Customer id from a verified customer session."""
    claims = _claims(request, CUSTOMER_COOKIE)
    if claims.role != CUSTOMER_ROLE:
        raise HTTPException(status_code=403, detail="Customer session required")
    return claims.subject


def require_admin(request: Request) -> str:
    """Admin username from a verified admin session."""
    claims = _claims(request, ADMIN_COOKIE)
    if claims.role != ADMIN_ROLE:
        logger.warning("admin_access_denied", path=request.url.path, subject=claims.subject)
        raise HTTPException(status_code=403, detail="Admin access required")
    return claims.subject


def set_session_cookie(response: Response, cookie_name: str, token: str) -> None:
    response.set_cookie(
        key=cookie_name,
        value=token,
        max_age=config.session_ttl_seconds(),
        httponly=True,
        secure=config.secure_cookies(),
        samesite="lax",
    )
