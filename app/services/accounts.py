"""Account service — sign-up and password sign-in."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import AuthRequired, EmailTaken
from app.models.user import User
from app.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(db: AsyncSession, email: str):
    result = await db.execute(select(User).where(User.email == _normalize_email(email)))
    return result.scalar_one_or_none()


async def register_user(db: AsyncSession, email: str, password: str) -> User:
    """Create a user, rejecting an email that is already registered."""
    if await get_user_by_email(db, email):
        raise EmailTaken()

    user = User(email=_normalize_email(email), password_hash=hash_password(password))
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent sign-up for the same address.
        await db.rollback()
        raise EmailTaken()

    logger.info("Registered user %s", user.id)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    """Return the user whose stored hash matches ``password``."""
    user = await get_user_by_email(db, email)
    if not user or not verify_password(user.password_hash, password):
        logger.info("Failed sign-in attempt")
        raise AuthRequired("Invalid credentials")
    return user
