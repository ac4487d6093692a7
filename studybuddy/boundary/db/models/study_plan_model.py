"""
Study plan ORM model.

Dependencies: sqlalchemy, studybuddy.boundary.db.base
System role: Study plan persistence
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from studybuddy.boundary.db.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class StudyPlanModel(Base, UUIDMixin, TimestampMixin, OwnedMixin):
    """
    Study plan with a list of topics.

    Attributes:
        title: Plan title
        description: Plan description
        topics: JSON list of {id, title, description, completed, deadline}
        start_date: Plan start (UTC)
        end_date: Plan end (UTC)
        progress: Percentage of completed topics, recomputed on every write
    """

    __tablename__ = "study_plans"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    topics: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
