"""
Theme repository — the theme list read path, catalog seeding, theme creation.

The list of themes is served from a short-lived cache so bursts of page
loads do not hit the database for every request. A cache entry is a list of
plain dicts, safe to hand out after the session that produced it is gone.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound, ValidationError
from app.models.form import Form
from app.models.theme import Theme
from app.schemas.form import ThemeCreate
from app.utils.cache import TimedCache
from app.utils.common import sanitize_name

logger = logging.getLogger(__name__)

THEMES_CACHE_KEY = "themes:all"

# Catalog offered when the database holds no themes at all.
DEFAULT_THEMES = [
    {"name": "Italian", "max_votes": 100},
    {"name": "Mexican", "max_votes": 100},
    {"name": "Chinese", "max_votes": 100},
    {"name": "Indian", "max_votes": 100},
    {"name": "Mediterranean", "max_votes": 100},
]


def catalog_theme_id(name: str) -> str:
    return f"theme-{sanitize_name(name)}"


def theme_snapshot(theme: Theme) -> Dict:
    return {
        "id": theme.id,
        "name": theme.name,
        "max_votes": theme.max_votes,
        "form_id": theme.form_id,
        "vote_count": theme.vote_count,
    }


def validate_theme_fields(name: Optional[str], max_votes: Optional[int]) -> str:
    """Return the trimmed name or raise ValidationError."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Each option must have a name")
    if isinstance(max_votes, bool) or not isinstance(max_votes, int) or max_votes < 1:
        raise ValidationError("Maximum votes must be a positive number")
    return name.strip()


async def _fetch_all(db: AsyncSession) -> List[Theme]:
    result = await db.execute(select(Theme).order_by(Theme.created_at, Theme.id))
    return list(result.scalars().all())


class ThemeRepository:
    """Theme storage with a time-boxed snapshot of the full list."""

    def __init__(self, cache: TimedCache):
        self.cache = cache

    def invalidate(self) -> None:
        self.cache.invalidate(THEMES_CACHE_KEY)

    async def list_themes(self, db: AsyncSession) -> List[Dict]:
        cached = self.cache.get(THEMES_CACHE_KEY)
        if cached is not None:
            return list(cached)

        try:
            themes = await _fetch_all(db)
            if not themes:
                logger.info("No themes found, seeding default catalog")
                themes = await self.seed_defaults(db)
        except SQLAlchemyError:
            stale = self.cache.peek(THEMES_CACHE_KEY)
            if stale is None:
                raise
            logger.warning("Theme read failed, serving stale snapshot", exc_info=True)
            await db.rollback()
            return list(stale)

        snapshot = [theme_snapshot(t) for t in themes]
        self.cache.set(THEMES_CACHE_KEY, snapshot)
        return list(snapshot)

    async def seed_defaults(self, db: AsyncSession) -> List[Theme]:
        """
        Insert the default catalog rows that are not there yet.

        Rows are keyed by ``catalog_theme_id`` so running this any number of
        times leaves exactly one row per default theme.
        """
        wanted = {catalog_theme_id(t["name"]): t for t in DEFAULT_THEMES}

        # A concurrent seeder may insert some of the ids between our check and
        # our commit; the second pass only adds what is still missing.
        for _ in range(2):
            result = await db.execute(select(Theme.id).where(Theme.id.in_(list(wanted))))
            existing = set(result.scalars().all())
            missing = [
                Theme(id=theme_id, name=t["name"], max_votes=t["max_votes"])
                for theme_id, t in wanted.items()
                if theme_id not in existing
            ]
            if not missing:
                break
            db.add_all(missing)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                logger.info("Default themes partly seeded concurrently, re-checking")
                continue
            logger.info("Seeded %d default themes", len(missing))
            break

        result = await db.execute(
            select(Theme).where(Theme.id.in_(list(wanted))).order_by(Theme.created_at, Theme.id)
        )
        return list(result.scalars().all())

    async def create_theme(self, db: AsyncSession, data: ThemeCreate) -> Theme:
        name = validate_theme_fields(data.name, data.max_votes)

        if data.form_id is not None:
            if await db.get(Form, data.form_id) is None:
                raise NotFound("Form not found")

        theme = Theme(name=name, max_votes=data.max_votes, form_id=data.form_id)
        db.add(theme)
        await db.commit()
        self.invalidate()

        logger.info("Created theme %s", theme.id)
        return theme
