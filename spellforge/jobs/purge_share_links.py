"""
Scheduled job to delete expired short links.

Lookups already ignore expired rows; this keeps the table small.
Can be run as a standalone script or called from a scheduler.
"""

import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError

from spellforge.db.database import async_session_factory
from spellforge.db.operations import purge_expired_share_links

logger = logging.getLogger(__name__)


async def run_purge() -> int:
    """
    Delete every expired short link.

    Returns:
        Number of links deleted (0 if the database could not be reached)
    """
    logger.info("Purging expired share links...")

    try:
        async with async_session_factory() as session:
            count = await purge_expired_share_links(session)
            await session.commit()
    except SQLAlchemyError as e:
        logger.error("Error purging share links: %s", e)
        return 0

    logger.info("Share link purge complete. Deleted: %d", count)
    return count


def main() -> None:
    """CLI entry point for the purge job."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_purge())


if __name__ == "__main__":
    main()
