"""Votes router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.vote import VoteCreate, VoteOut
from app.services.votes import submit_vote

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("", response_model=VoteOut)
async def cast_vote(data: VoteCreate, db: AsyncSession = Depends(get_db)):
    """Record one vote for a theme, subject to the cap and one-vote-per-name rule."""
    return await submit_vote(db, data.theme_id, data.voter_name)
