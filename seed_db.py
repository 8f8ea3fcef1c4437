"""
Seed the default theme catalog into the configured database.

Safe to run repeatedly: catalog rows are keyed by derived ids and only the
missing ones are inserted.

    python seed_db.py
"""

import asyncio
import logging

from app import models  # noqa: F401
from app.config import settings
from app.database import Base, async_session, engine
from app.services.themes import ThemeRepository
from app.utils.cache import TimedCache

logger = logging.getLogger("seed_db")


async def async_main():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    repository = ThemeRepository(TimedCache(ttl=settings.THEME_CACHE_TTL_SECONDS))
    async with async_session() as session:
        themes = await repository.seed_defaults(session)

    for theme in themes:
        logger.info("%-22s %-15s max_votes=%d", theme.id, theme.name, theme.max_votes)
    logger.info("Seeding completed: %d catalog themes present.", len(themes))
    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(message)s")
    asyncio.run(async_main())
