from fastapi import APIRouter
from scoutbase.api.auth.router import router as auth_router
from scoutbase.api.events.router import router as events_router
from scoutbase.api.helpers.router import router as helpers_router
from scoutbase.api.badges.router import router as badges_router
from scoutbase.api.achievements.router import router as achievements_router
from scoutbase.api.announcements.router import router as announcements_router
from scoutbase.api.users.router import router as users_router
from scoutbase.api.notifications.router import router as notifications_router

api_router = APIRouter(
    prefix="/views",
    responses={404: {"description": "Not found"}},
)

api_router.include_router(router=auth_router, tags=["auth"])
api_router.include_router(router=events_router, tags=["events"])
api_router.include_router(router=helpers_router, tags=["helpers"])
api_router.include_router(router=badges_router, tags=["badges"])
api_router.include_router(router=achievements_router, tags=["achievements"])
api_router.include_router(router=announcements_router, tags=["announcements"])
api_router.include_router(router=users_router, tags=["users"])
api_router.include_router(router=notifications_router, tags=["notifications"])
