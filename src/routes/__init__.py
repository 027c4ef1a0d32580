from src.routes.animals import router as animals_router
from src.routes.auth import router as auth_router
from src.routes.dashboard import router as dashboard_router
from src.routes.users import router as users_router

__all__ = [
    "animals_router",
    "auth_router",
    "dashboard_router",
    "users_router",
]
