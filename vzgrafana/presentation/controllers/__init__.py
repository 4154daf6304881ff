"""
Controllers Package - Presentation Layer

FastAPI routers translating HTTP requests into use case calls.
"""

from .grafana_controller import router as grafana_router
from .system_controller import router as system_router

__all__ = ["grafana_router", "system_router"]
