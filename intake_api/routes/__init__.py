# intake_api/routes/__init__.py
"""
API route handlers organized by domain.
"""

from intake_api.routes.health import router as health_router
from intake_api.routes.leads import router as leads_router

__all__ = [
    "health_router",
    "leads_router",
]
