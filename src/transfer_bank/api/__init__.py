from .transfers import router as transfers_router
from .users import router as users_router

__all__ = ["transfers_router", "users_router"]
