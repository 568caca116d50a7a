"""
API routers for poolstat.
"""

from .zpool_router import router as zpool_router

__all__ = [
    "zpool_router"
]
