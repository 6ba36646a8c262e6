"""API routes."""

from .rooms import router as rooms_router
from .files import router as files_router
from .folders import router as folders_router
from .permissions import router as permissions_router
from .users import router as users_router
from .tags import router as tags_router
from .links import router as links_router
from .ai_queries import router as ai_queries_router
from .watermarks import router as watermarks_router

__all__ = [
    "rooms_router",
    "files_router",
    "folders_router",
    "permissions_router",
    "users_router",
    "tags_router",
    "links_router",
    "ai_queries_router",
    "watermarks_router",
]
