"""
Forms router — a creator's dashboard list, creation, and the public form page data.

Endpoints:
    GET  /forms       → the caller's forms, newest first (auth)
    POST /forms       → create a form with its themes (auth)
    GET  /forms/{id}  → one form with its themes and vote counts (public)
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.routers.auth import require_user
from app.routers.themes import get_theme_repository
from app.schemas.form import FormCreate, FormOut
from app.services import forms as form_service
from app.services.themes import ThemeRepository

router = APIRouter(prefix="/forms", tags=["forms"])


@router.get("", response_model=List[FormOut])
async def list_my_forms(
    current_user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    return await form_service.list_forms(db, current_user.id)


@router.post("", response_model=FormOut)
async def create_form(
    data: FormCreate,
    current_user: User = Depends(require_user),
    repository: ThemeRepository = Depends(get_theme_repository),
    db: AsyncSession = Depends(get_db),
):
    """Create a form and its options in one go."""
    return await form_service.create_form(db, current_user.id, data, themes=repository)


@router.get("/{form_id}", response_model=FormOut)
async def read_form(form_id: str, db: AsyncSession = Depends(get_db)):
    """Public: anyone with the link can load a form to vote on it."""
    return await form_service.get_form(db, form_id)
