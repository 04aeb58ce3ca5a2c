from pokebrowser.api.browse import router as browse_router
from pokebrowser.api.compare import router as compare_router
from pokebrowser.api.creator import router as creator_router
from pokebrowser.api.health import router as health_router
from pokebrowser.api.resources import router as resources_router
from pokebrowser.api.users import router as users_router

__all__ = [
    "browse_router",
    "compare_router",
    "creator_router",
    "health_router",
    "resources_router",
    "users_router",
]
