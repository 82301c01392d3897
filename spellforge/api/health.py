"""
Health check endpoints.

``/health`` is the liveness probe. ``/ready`` also checks that the short-link
table can be queried; the codec and builder endpoints work without it.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from spellforge.db.database import get_session
from spellforge.models.db import ShareLinkDB

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    share_links: str | None = None


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
) -> HealthResponse:
    """Readiness probe. 503 when the short-link store cannot be queried."""
    try:
        await session.execute(select(ShareLinkDB.id).limit(1))
    except SQLAlchemyError as e:
        logger.warning("Short-link store unavailable: %s", type(e).__name__)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", share_links="unavailable")

    return HealthResponse(status="ready", share_links="available")
