from fastapi import APIRouter

from inkwell.api.routers import auth, comments, downloads, posts, users


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(users.router, prefix="/user", tags=["users"])
    router.include_router(posts.router, prefix="/posts", tags=["posts"])
    router.include_router(comments.router, prefix="/comments", tags=["comments"])
    router.include_router(downloads.router, prefix="/unduhan", tags=["downloads"])
    return router


__all__ = [
    "create_api_router",
]
