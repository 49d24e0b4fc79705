"""Health check routes for the FastAPI application."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from ...config.environment import IS_PRODUCTION_ENVIRONMENT
from ...config.settings import API_VERSION
from ...db import Database, DatabaseError
from ..dependencies import get_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

@router.get("/")
async def root():
    """Service information."""
    return {
        "status": "healthy",
        "environment": "production" if IS_PRODUCTION_ENVIRONMENT else "development",
        "version": API_VERSION
    }

@router.get("/health")
def health_check(database: Database = Depends(get_database)):
    """Check if the application and database are healthy."""
    try:
        with database.session() as session:
            session.execute(text('SELECT 1'))
    except DatabaseError as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "database": "unavailable" if IS_PRODUCTION_ENVIRONMENT else str(e)
            }
        )

    return {"status": "healthy", "database": "connected"}
