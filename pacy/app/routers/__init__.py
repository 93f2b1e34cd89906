from .session import router as session_router
from .workouts import router as workouts_router
from .oauth import router as oauth_router
from .settings import router as settings_router

__all__ = [
    "session_router",
    "workouts_router",
    "oauth_router",
    "settings_router",
]
