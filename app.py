"""
App assembly entry point.

Re-exports the FastAPI `app` from `client_registry.api.main` so the service can
be served as ``uvicorn app:app``.
"""

from client_registry.api.main import app  # noqa: F401
