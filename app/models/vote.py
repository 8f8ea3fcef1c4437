"""Vote model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils.common import utcnow


class Vote(Base):
    __tablename__ = "votes"

    # Derived key, see app.services.votes.derive_vote_id
    id: Mapped[str] = mapped_column(String(160), primary_key=True)
    theme_id: Mapped[str] = mapped_column(
        ForeignKey("themes.id", ondelete="CASCADE"), index=True, nullable=False
    )
    voter_name: Mapped[str] = mapped_column(String(200), nullable=False)

    # One vote per normalized name across the whole system.
    voter_key: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
