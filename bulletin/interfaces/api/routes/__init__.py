from fastapi import FastAPI

from .announcements import router as announcements_router
from .auth import router as auth_router
from .notifications import router as notifications_router


def register_routes(app: FastAPI) -> None:
    """Registra todos los routers de la API en la aplicación FastAPI."""

    app.include_router(auth_router)
    app.include_router(announcements_router)
    app.include_router(notifications_router)
