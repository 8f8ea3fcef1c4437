"""Theme model — one votable option with a vote cap."""

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.common import new_id, utcnow


class Theme(Base):
    __tablename__ = "themes"
    __table_args__ = (
        CheckConstraint("max_votes >= 1", name="ck_themes_max_votes_positive"),
        CheckConstraint(
            "vote_count >= 0 AND vote_count <= max_votes",
            name="ck_themes_vote_count_within_cap",
        ),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    max_votes: Mapped[int] = mapped_column(Integer, nullable=False)

    # Catalog themes are seeded without a form.
    form_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("forms.id", ondelete="CASCADE"), index=True
    )

    # Maintained by vote admission; claimed with a conditional UPDATE.
    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    form: Mapped[Optional["Form"]] = relationship("Form", back_populates="themes")  # noqa: F821

    @property
    def is_full(self) -> bool:
        return self.vote_count >= self.max_votes
