"""
Short-link storage operations.

A short link maps a random id to ``{hash, type, path}`` for a fixed TTL.
Expiry is checked in SQL so it works the same on every backend.
"""

import logging
import uuid
from datetime import UTC, datetime, timedelta
from urllib.parse import urlencode

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from spellforge.config import settings
from spellforge.models.db import ShareLinkDB

logger = logging.getLogger(__name__)

SHARE_TYPES = frozenset({"deck", "team"})

# Attempts at finding an unused id before giving up
MAX_ID_ATTEMPTS = 5


class ShareIdExhaustedError(RuntimeError):
    """No unused short id could be generated."""


def generate_share_id(length: int | None = None) -> str:
    """Random hex id, ``settings.share_id_length`` characters by default."""
    return uuid.uuid4().hex[: length or settings.share_id_length]


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(UTC)


async def create_share_link(
    session: AsyncSession,
    hash_value: str,
    share_type: str,
    path: str | None = None,
    now: datetime | None = None,
) -> ShareLinkDB:
    """
    Store a token under a new short id.

    Raises:
        ValueError: If share_type is not "deck" or "team"
        ShareIdExhaustedError: If no free id was found
    """
    if share_type not in SHARE_TYPES:
        raise ValueError(f"Invalid share type: {share_type}")

    current = _now(now)

    for _ in range(MAX_ID_ATTEMPTS):
        share_id = generate_share_id()
        if await session.get(ShareLinkDB, share_id) is None:
            break
    else:
        raise ShareIdExhaustedError("Could not allocate a unique share id")

    link = ShareLinkDB(
        id=share_id,
        hash=hash_value,
        type=share_type,
        path=path or settings.default_share_path,
        created_at=current,
        expires_at=current + timedelta(days=settings.share_ttl_days),
    )
    session.add(link)
    await session.flush()

    logger.info(
        "share_link_created",
        extra={"share_id": share_id, "share_type": share_type, "hash_length": len(hash_value)},
    )
    return link


async def get_share_link(
    session: AsyncSession,
    share_id: str,
    now: datetime | None = None,
) -> ShareLinkDB | None:
    """Look up a link. Returns None when unknown or expired."""
    result = await session.execute(
        select(ShareLinkDB).where(
            ShareLinkDB.id == share_id,
            ShareLinkDB.expires_at > _now(now),
        )
    )
    return result.scalar_one_or_none()


async def purge_expired_share_links(session: AsyncSession, now: datetime | None = None) -> int:
    """
    Delete expired links.

    Returns:
        Number of rows deleted
    """
    result = await session.execute(
        delete(ShareLinkDB).where(ShareLinkDB.expires_at <= _now(now))
    )
    count = result.rowcount or 0
    if count:
        logger.info("Purged %d expired share links", count)
    return count


def build_redirect_target(link: ShareLinkDB) -> str:
    """
    Builder path with the token in the right query parameter.

    Teams use ``?team=``, decks use ``?d=``.
    """
    param = "team" if link.type == "team" else "d"
    separator = "&" if "?" in link.path else "?"
    return f"{link.path}{separator}{urlencode({param: link.hash})}"
