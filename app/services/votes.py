"""
Vote admission.

A vote is accepted when

    1. no vote exists yet for the same (normalized) voter name, anywhere;
    2. the theme exists;
    3. the theme still has room under its ``max_votes`` cap.

Steps 1 and 3 are re-checked by the database at write time: the slot is
claimed with a conditional ``UPDATE ... WHERE vote_count < max_votes`` and
``votes.voter_key`` carries a unique index, so two concurrent requests
cannot both take the last slot or both vote under one name.
"""

import logging
import time
import uuid

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import AlreadyVoted, CapacityExceeded, NotFound, ValidationError
from app.models.theme import Theme
from app.models.vote import Vote
from app.utils.common import normalize_voter_name, sanitize_name

logger = logging.getLogger(__name__)


def derive_vote_id(voter_name: str) -> str:
    """``vote-<slug>-<epoch ms>-<random>``; unique across retries of one name."""
    slug = sanitize_name(voter_name)[:64] or "anonymous"
    return f"vote-{slug}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


async def has_voted(db: AsyncSession, voter_name: str) -> bool:
    result = await db.execute(
        select(Vote.id).where(Vote.voter_key == normalize_voter_name(voter_name)).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def submit_vote(db: AsyncSession, theme_id: str, voter_name: str) -> Vote:
    theme_id = (theme_id or "").strip()
    display_name = (voter_name or "").strip()
    if not theme_id:
        raise ValidationError("Please choose an option to vote for")
    if not display_name:
        raise ValidationError("Please enter your name")

    if await has_voted(db, display_name):
        raise AlreadyVoted()

    theme = await db.get(Theme, theme_id)
    if theme is None:
        raise NotFound("Theme not found")
    if theme.is_full:
        raise CapacityExceeded()

    claimed = await db.execute(
        update(Theme)
        .where(Theme.id == theme_id, Theme.vote_count < Theme.max_votes)
        .values(vote_count=Theme.vote_count + 1)
    )
    if claimed.rowcount == 0:
        # Someone else took the last slot since we read the theme.
        await db.rollback()
        raise CapacityExceeded()

    vote = Vote(
        id=derive_vote_id(display_name),
        theme_id=theme_id,
        voter_name=display_name,
        voter_key=normalize_voter_name(display_name),
    )
    db.add(vote)
    try:
        await db.commit()
    except IntegrityError:
        # Concurrent vote under the same name; also releases the claimed slot.
        await db.rollback()
        raise AlreadyVoted()

    logger.info("Recorded vote %s for theme %s", vote.id, theme_id)
    return vote
