"""Fable Apparels FastAPI application.

The domain is initialized at module level so uvicorn workers share it.
PROTEAN_ENV picks the config overlay from ``fable/domain.toml``.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from fable.api import create_app
from fable.domain import fable

fable.init()

app = create_app()
