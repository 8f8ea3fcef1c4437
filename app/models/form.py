"""Form model — a titled ballot that owns its themes."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.common import new_id, utcnow


class Form(Base):
    __tablename__ = "forms"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    creator_id: Mapped[str] = mapped_column(
        ForeignKey("users.id"), index=True, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    # ── Relationships ──
    creator: Mapped["User"] = relationship("User", back_populates="forms")  # noqa: F821
    themes: Mapped[List["Theme"]] = relationship(  # noqa: F821
        "Theme",
        back_populates="form",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Theme.created_at",
    )
