"""
Health check endpoints.

Provides liveness and readiness probes. Readiness checks the database
and reports the size of the in-process state.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokebrowser.browsing import BrowseSessionRegistry, get_session_registry
from pokebrowser.db.database import get_session
from pokebrowser.services.comparison import ComparisonStore, get_comparison_store

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    browse_sessions: int | None = None
    compared: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Does not check dependencies."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    registry: Annotated[BrowseSessionRegistry, Depends(get_session_registry)],
    store: Annotated[ComparisonStore, Depends(get_comparison_store)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the user database is unreachable. PokeAPI is not
    probed: list views degrade on their own when it is down.
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="disconnected")

    return HealthResponse(
        status="ready",
        database="connected",
        browse_sessions=len(registry),
        compared=len(store),
    )
