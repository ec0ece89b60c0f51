"""Health check endpoint. Used for liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.core.config import get_settings
from trackplan.infrastructure.persistence.database import get_db
from trackplan.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health_check(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HealthResponse | JSONResponse:
    """Return ok when the database answers; 503 otherwise."""
    settings = get_settings()
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        body = HealthResponse(
            status="degraded",
            app=settings.app_name,
            version=settings.app_version,
            database="unavailable",
        )
        return JSONResponse(status_code=503, content=body.model_dump())
    return HealthResponse(
        status="ok", app=settings.app_name, version=settings.app_version, database="ok"
    )
