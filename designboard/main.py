from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse

from designboard import __version__
from designboard.api.http import (
    health_router, auth_router, users_router, projects_router, versions_router, assistant_router
)
from designboard.core.config import settings
from designboard.core.db import create_tables
from designboard.core.errors import register_exception_handlers
from designboard.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    if settings.auto_create_tables:
        await create_tables()
        logger.info("Database tables are ready")
    logger.info(f"DesignBoard API {__version__} started")
    yield


app = FastAPI(
    title="DesignBoard",
    description="Холст для проектирования интерфейсов с версиями и ассистентом",
    version=__version__,
    lifespan=lifespan
)

# Cookie сессии требует явного списка origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


class NoCacheStaticFiles(StaticFiles):
    async def get_response(self, path: str, scope):
        response = await super().get_response(path, scope)
        if response:
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response


if os.path.isdir(settings.static_dir):
    app.mount("/static", NoCacheStaticFiles(directory=settings.static_dir), name="static")

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(projects_router)
app.include_router(versions_router)
app.include_router(assistant_router)


@app.get("/")
async def root():
    """Корневой эндпоинт: главная страница или описание API"""
    index_path = os.path.join(settings.static_dir, "index.html")
    if os.path.exists(index_path):
        return FileResponse(index_path)
    return {
        "message": "DesignBoard API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }
