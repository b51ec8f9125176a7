"""API route modules."""

from .contacts import router as contacts_router
from .health import router as health_router
from .templates import router as templates_router

__all__ = ["contacts_router", "health_router", "templates_router"]
