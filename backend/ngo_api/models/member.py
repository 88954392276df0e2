"""
NGO Site Backend - Member SQLAlchemy Model
==========================================

What:  ORM model for the `members` table (database backend only).
Who:   Used by SqlRecordStore through the MEMBER record kind and by Alembic.

Column notes:
    - id: UUID4 hex generated in Python; never reused after deletion
    - image_ref: public URL of the member's photo in the asset store, NULL
      when the member has no image. While the row exists the referenced
      file exists.
    - created_at / updated_at: UTC, set by the record store
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ngo_api.database import Base


class Member(Base):
    """A person shown on the NGO's team page."""

    __tablename__ = "members"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    position: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    achievements: Mapped[str] = mapped_column(Text, nullable=False, default="")

    image_ref: Mapped[Optional[str]] = mapped_column(
        String(512),
        nullable=True,
        default=None,
        comment="Public URL of the member's image in the asset store",
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # list_all() returns members in creation order
    __table_args__ = (
        Index("idx_members_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, name='{self.name}', position='{self.position}')>"
