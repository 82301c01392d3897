"""
Short-link endpoints.

POST /api/share stores an encoded deck/team token under a short id.
GET /s/{share_id} redirects to the builder with the token in the query.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from spellforge.config import MAX_SHARE_HASH_LENGTH, MAX_SHARE_PATH_LENGTH, settings
from spellforge.db import SHARE_TYPES, build_redirect_target, create_share_link, get_share_link
from spellforge.db.database import get_session
from spellforge.db.operations import ShareIdExhaustedError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["share"])


class ShareRequest(BaseModel):
    """
    Token to store behind a short link.

    ``hash`` and ``type`` are checked in the handler so a bad request gets a
    400 with a readable message.
    """

    hash: str | None = Field(default=None, max_length=MAX_SHARE_HASH_LENGTH)
    type: str | None = None
    path: str | None = Field(default=None, max_length=MAX_SHARE_PATH_LENGTH)


class ShareResponse(BaseModel):
    """The short id of a stored link."""

    id: str


def _safe_path(path: str | None) -> str:
    # Only same-site paths; anything else falls back to the builder
    if not path or not path.startswith("/") or path.startswith("//"):
        return settings.default_share_path
    return path


@router.post("/api/share", response_model=ShareResponse)
async def create_share(
    request: ShareRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ShareResponse:
    """Store a token and return its short id. Links expire after the configured TTL."""
    if not request.hash:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing hash parameter")
    if request.type not in SHARE_TYPES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid type parameter")

    try:
        link = await create_share_link(
            session,
            hash_value=request.hash,
            share_type=request.type,
            path=_safe_path(request.path),
        )
    except ShareIdExhaustedError as e:
        logger.error("Failed to allocate share id: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not create a short link. Please use the long URL.",
        ) from e

    return ShareResponse(id=link.id)


@router.get("/s/{share_id}", response_class=RedirectResponse)
async def resolve_share(
    share_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> RedirectResponse:
    """
    Redirect a short link to the builder.

    Unknown or expired ids redirect to the builder with ``error=link-expired``.
    """
    link = await get_share_link(session, share_id)
    if link is None:
        logger.info("Short link %s not found or expired", share_id)
        return RedirectResponse(
            url=f"{settings.default_share_path}?error=link-expired",
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
        )

    return RedirectResponse(
        url=build_redirect_target(link),
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )
