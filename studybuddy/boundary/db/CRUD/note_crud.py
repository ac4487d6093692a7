"""
Note CRUD operations.

Dependencies: sqlalchemy, studybuddy.boundary.db.models
System role: Note persistence operations
"""

from typing import Sequence

from sqlalchemy import String, cast, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.models.note_model import NoteModel
from studybuddy.boundary.db.CRUD.owned_crud import OwnedCRUD


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class NoteCRUD(OwnedCRUD[NoteModel]):
    """CRUD operations for NoteModel."""

    def __init__(self) -> None:
        """Initialize NoteCRUD with NoteModel."""
        super().__init__(NoteModel)

    async def search(
        self,
        session: AsyncSession,
        owner_id: str,
        query: str,
    ) -> Sequence[NoteModel]:
        """
        Case-insensitive substring search over title, content and tags.

        Args:
            session: Async database session
            owner_id: Owning user
            query: Text to look for

        Returns:
            Matching notes, most recently updated first
        """
        pattern = _like_pattern(query)
        stmt = (
            select(NoteModel)
            .where(
                NoteModel.owner_id == owner_id,
                or_(
                    NoteModel.title.ilike(pattern, escape="\\"),
                    NoteModel.content.ilike(pattern, escape="\\"),
                    cast(NoteModel.tags, String).ilike(pattern, escape="\\"),
                ),
            )
            .order_by(NoteModel.updated_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


note_crud = NoteCRUD()
