"""
NGO Site Backend - Event SQLAlchemy Model
=========================================

What:  ORM model for the `events` table (database backend only).
Note:  `date` and `time` are stored as the text the client sent
       (e.g. "2024-06-01", "10:00"); the site renders them verbatim.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ngo_api.database import Base


class Event(Base):
    """A scheduled NGO activity."""

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    date: Mapped[str] = mapped_column(String(50), nullable=False)
    time: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    volunteers_needed: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_events_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title='{self.title}', date='{self.date}')>"
