"""Signed session tokens.

A token is ``<payload>.<signature>``: the payload is URL-safe base64 of a JSON
claim set ``{"sub", "role", "exp"}`` and the signature is an HMAC-SHA256 of the
encoded payload under the configured session secret. Tokens carry no server
state; revocation is by expiry or secret rotation.
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass

from fable import config

CUSTOMER_ROLE = "customer"
ADMIN_ROLE = "admin"


class InvalidSessionToken(Exception):
    """The token is missing, malformed, tampered with, or expired."""


@dataclass(frozen=True)
class SessionClaims:
    subject: str
    role: str
    expires_at: int

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(value: str) -> bytes:
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + padding)


def _sign(payload: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), payload.encode("ascii"), hashlib.sha256).digest()
    return _b64encode(digest)


def issue_token(
    subject: str, role: str = CUSTOMER_ROLE, ttl_seconds: int | None = None, now: float | None = None
) -> str:
    now = time.time() if now is None else now
    ttl_seconds = config.session_ttl_seconds() if ttl_seconds is None else ttl_seconds
    claims = {"sub": str(subject), "role": role, "exp": int(now + ttl_seconds)}
    payload = _b64encode(json.dumps(claims, separators=(",", ":"), sort_keys=True).encode("utf-8"))
    return f"{payload}.{_sign(payload, config.session_secret())}"


def verify_token(token: str | None, now: float | None = None) -> SessionClaims:
    if not isinstance(token, str) or not token.isascii() or token.count(".") != 1:
        raise InvalidSessionToken("Malformed session token")

    payload, signature = token.split(".")
    expected = _sign(payload, config.session_secret())
    if not hmac.compare_digest(signature, expected):
        raise InvalidSessionToken("Session token signature mismatch")

    try:
        claims = json.loads(_b64decode(payload))
        session = SessionClaims(subject=str(claims["sub"]), role=str(claims["role"]), expires_at=int(claims["exp"]))
    except (ValueError, KeyError, TypeError) as exc:
        raise InvalidSessionToken("Unreadable session token") from exc

    now = time.time() if now is None else now
    if session.expires_at <= now:
        raise InvalidSessionToken("Session token expired")
    return session
