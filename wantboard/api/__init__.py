from wantboard.api.health import router as health_router
from wantboard.api.wants import router as wants_router

__all__ = [
    "health_router",
    "wants_router",
]
