from designboard.api.http.health import router as health_router
from designboard.api.http.auth import router as auth_router
from designboard.api.http.users import router as users_router
from designboard.api.http.projects import router as projects_router
from designboard.api.http.versions import router as versions_router
from designboard.api.http.assistant import router as assistant_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "projects_router",
    "versions_router",
    "assistant_router"
]
