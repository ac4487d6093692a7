"""
Note ORM model.

Dependencies: sqlalchemy, studybuddy.boundary.db.base
System role: Note persistence
"""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from studybuddy.boundary.db.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class NoteModel(Base, UUIDMixin, TimestampMixin, OwnedMixin):
    """Free-text study note with tags."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
