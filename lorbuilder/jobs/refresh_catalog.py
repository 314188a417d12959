"""
Refresh the card catalog from Riot's Data Dragon.

Run this job after a new card set releases so deck generation sees it.
"""

import asyncio
import logging

from lorbuilder.db.database import async_session_factory, init_db
from lorbuilder.services.card_fetcher import refresh_catalog

logger = logging.getLogger(__name__)


async def run_refresh() -> int:
    """Fetch every set bundle and replace the stored catalog."""
    logger.info("Refreshing card catalog from Data Dragon...")
    await init_db()

    async with async_session_factory() as session:
        try:
            stored = await refresh_catalog(session)
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error("Failed to refresh card catalog: %s", e)
            raise

    logger.info("Stored %d cards", stored)
    return stored


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_refresh())


if __name__ == "__main__":
    main()
