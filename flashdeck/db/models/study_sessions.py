from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from flashdeck.db.models.base import Base


class StudySession(Base):
    __tablename__ = "study_sessions"
    __table_args__ = (
        CheckConstraint("cards_studied >= 0", name="cards_studied_non_negative"),
        CheckConstraint("cards_correct >= 0", name="cards_correct_non_negative"),
        CheckConstraint("duration_seconds >= 0", name="duration_non_negative"),
        Index("idx_study_sessions_deck_created", "deck_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    deck_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("decks.id", ondelete="CASCADE"),
        nullable=False,
    )
    cards_studied: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cards_correct: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    session_type: Mapped[str] = mapped_column(String(16), nullable=False, default="study")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )
