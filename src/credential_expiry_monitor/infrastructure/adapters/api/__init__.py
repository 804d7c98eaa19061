"""API adapter for HTTP endpoints."""

from .app import create_app
from .models import HealthResponse, RunResponse, RunSummaryResponse

__all__ = [
    "HealthResponse",
    "RunResponse",
    "RunSummaryResponse",
    "create_app",
]
