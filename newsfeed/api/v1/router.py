from fastapi import APIRouter

from .endpoints import auth, health, news, preferences

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(preferences.router, prefix="/preferences", tags=["preferences"])
api_router.include_router(news.router, prefix="/news", tags=["news"])
