"""User model — email + password account."""

from datetime import datetime
from typing import List

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.common import new_id, utcnow


class User(Base):
    __tablename__ = "users"

    # ── Identity ──
    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # ── Timestamps ──
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    # ── Relationships ──
    forms: Mapped[List["Form"]] = relationship(  # noqa: F821
        "Form", back_populates="creator"
    )
