"""Themes router — cached list and single-theme creation."""

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.routers.auth import require_user
from app.schemas.form import ThemeCreate, ThemeOut
from app.services.themes import ThemeRepository

router = APIRouter(prefix="/themes", tags=["themes"])


def get_theme_repository(request: Request) -> ThemeRepository:
    """The application-wide repository (and its cache) set up in app.main."""
    return request.app.state.theme_repository


@router.get("", response_model=List[ThemeOut])
async def list_themes(
    repository: ThemeRepository = Depends(get_theme_repository),
    db: AsyncSession = Depends(get_db),
):
    """All themes; seeds the default catalog on an empty database."""
    return await repository.list_themes(db)


@router.post("", response_model=ThemeOut)
async def create_theme(
    data: ThemeCreate,
    current_user: User = Depends(require_user),
    repository: ThemeRepository = Depends(get_theme_repository),
    db: AsyncSession = Depends(get_db),
):
    return await repository.create_theme(db, data)
