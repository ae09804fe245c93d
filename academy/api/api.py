# Fichier: academy/api/api.py
from fastapi import APIRouter
from .endpoints import (
    health_router,
    algorithm_router,
    user_router,
    progress_router,
    achievement_router,
    chat_router,
    analytics_router,
    dashboard_router,
)

api_router = APIRouter()

api_router.include_router(health_router.router, tags=["Health"])
api_router.include_router(algorithm_router.router, prefix="/algorithms", tags=["Algorithms"])
api_router.include_router(user_router.router, prefix="/users", tags=["Users"])
api_router.include_router(progress_router.router, prefix="/progress", tags=["Progress"])
api_router.include_router(achievement_router.router, prefix="/achievements", tags=["Achievements"])
api_router.include_router(chat_router.router, prefix="/chat", tags=["Chat"])
api_router.include_router(analytics_router.router, prefix="/analytics", tags=["Analytics"])
api_router.include_router(dashboard_router.router, prefix="/dashboard", tags=["Dashboard"])
