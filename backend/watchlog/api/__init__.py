"""
API Package

FastAPI routers for all endpoints.
"""
from watchlog.api.titles import router as titles_router
from watchlog.api.replay_events import router as replay_events_router
from watchlog.api.health import router as health_router

__all__ = [
    "titles_router",
    "replay_events_router",
    "health_router",
]
