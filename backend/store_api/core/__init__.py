"""
Application wiring: CORS, middlewares, exception handlers, lifespan.
"""

from store_api.core.cors import configure_cors
from store_api.core.errors import register_exception_handlers
from store_api.core.lifespan import lifespan
from store_api.core.middlewares import register_middlewares

__all__ = [
    "configure_cors",
    "register_exception_handlers",
    "lifespan",
    "register_middlewares",
]
