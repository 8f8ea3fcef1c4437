"""Form service — create a form together with its themes, list and fetch forms."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound, ValidationError
from app.models.form import Form
from app.models.theme import Theme
from app.schemas.form import FormCreate
from app.services.themes import ThemeRepository, validate_theme_fields

logger = logging.getLogger(__name__)


async def create_form(
    db: AsyncSession,
    creator_id: str,
    data: FormCreate,
    themes: Optional[ThemeRepository] = None,
) -> Form:
    """
    Create a form and all of its themes in one transaction.

    Everything is validated before anything is added to the session, so a
    rejected payload leaves no rows behind.
    """
    title = (data.title or "").strip()
    if not title or not data.themes:
        raise ValidationError("Please provide a title and at least one option")

    theme_rows = [
        Theme(name=validate_theme_fields(t.name, t.max_votes), max_votes=t.max_votes)
        for t in data.themes
    ]

    description = (data.description or "").strip() or None
    form = Form(
        title=title,
        description=description,
        creator_id=creator_id,
        themes=theme_rows,
    )
    db.add(form)
    await db.commit()

    if themes is not None:
        themes.invalidate()

    logger.info("User %s created form %s with %d themes", creator_id, form.id, len(theme_rows))
    return form


async def list_forms(db: AsyncSession, creator_id: str) -> List[Form]:
    """The creator's forms, newest first, themes eager-loaded."""
    result = await db.execute(
        select(Form)
        .where(Form.creator_id == creator_id)
        .order_by(Form.created_at.desc(), Form.id)
    )
    return list(result.scalars().all())


async def get_form(db: AsyncSession, form_id: str) -> Form:
    result = await db.execute(select(Form).where(Form.id == form_id))
    form = result.scalar_one_or_none()
    if not form:
        raise NotFound("Form not found")
    return form
