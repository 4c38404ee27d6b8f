"""
Public routers - No authentication required.
- /api/public/* - CMS content and storefront settings
- /api/health - Health check
"""

from .content import router as content_router
from .health import router as health_router

__all__ = ["content_router", "health_router"]
