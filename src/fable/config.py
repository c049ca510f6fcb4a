"""Application settings read from the environment.

Protean's own configuration (databases, event store, processing mode) lives in
``domain.toml``; this module covers what the HTTP layer needs on top of it.
"""

import os

DEFAULT_SESSION_TTL_SECONDS = 7 * 24 * 60 * 60
_DEV_SESSION_SECRET = "fable-dev-secret-change-me"


def session_secret() -> str:
    secret = os.environ.get("SESSION_SECRET")
    if secret:
        return secret
    if os.environ.get("PROTEAN_ENV") == "production":
        raise RuntimeError("SESSION_SECRET must be set in production")
    return _DEV_SESSION_SECRET


def session_ttl_seconds() -> int:
    return int(os.environ.get("SESSION_TTL_SECONDS", DEFAULT_SESSION_TTL_SECONDS))


def admin_credentials() -> tuple[str, str] | None:
    """Return the configured (username, password) pair, or None when admin login is disabled."""
    username = os.environ.get("ADMIN_USERNAME")
    password = os.environ.get("ADMIN_PASSWORD")
    if not username or not password:
        return None
    return username, password


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def secure_cookies() -> bool:
    return os.environ.get("PROTEAN_ENV") == "production"
