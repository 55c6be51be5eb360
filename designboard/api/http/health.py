import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from designboard import __version__
from designboard.core.db import ping

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Проверка состояния сервиса и базы данных"""
    try:
        await ping()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "version": __version__, "database": "unavailable"}
        )

    return {"status": "healthy", "version": __version__, "database": "ok"}
