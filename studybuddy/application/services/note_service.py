"""
Note service orchestrator.

Dependencies: studybuddy.boundary.db.CRUD, studybuddy.core.exceptions
System role: Note use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.CRUD.note_crud import note_crud
from studybuddy.boundary.db.models.note_model import NoteModel
from studybuddy.core.exceptions import DocumentNotFoundError, ValidationError

logger = logging.getLogger(__name__)


def note_to_dict(note: NoteModel) -> dict[str, Any]:
    return {
        "id": str(note.id),
        "title": note.title,
        "content": note.content,
        "tags": note.tags or [],
        "created_at": note.created_at,
        "updated_at": note.updated_at,
    }


class NoteService:
    """Note service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_owned(self, note_id: UUID, owner_id: str) -> NoteModel:
        note = await note_crud.get_for_owner(self.db, note_id, owner_id)
        if note is None:
            raise DocumentNotFoundError("Note", str(note_id))
        return note

    async def list_notes(self, owner_id: str) -> list[dict]:
        notes = await note_crud.list_for_owner(self.db, owner_id)
        return [note_to_dict(n) for n in notes]

    async def get_note(self, note_id: UUID, owner_id: str) -> dict:
        return note_to_dict(await self._get_owned(note_id, owner_id))

    async def create_note(self, owner_id: str, fields: dict[str, Any]) -> dict:
        note = await note_crud.create_for_owner(self.db, owner_id, **fields)
        await self.db.commit()
        logger.info("Note created", extra={"note_id": str(note.id), "owner_id": owner_id})
        return note_to_dict(note)

    async def update_note(self, note_id: UUID, owner_id: str, fields: dict[str, Any]) -> dict:
        note = await self._get_owned(note_id, owner_id)
        if fields:
            note = await note_crud.apply_updates(self.db, note, **fields)
            await self.db.commit()
            logger.info(
                "Note updated",
                extra={"note_id": str(note_id), "updates": list(fields.keys())},
            )
        return note_to_dict(note)

    async def delete_note(self, note_id: UUID, owner_id: str) -> None:
        deleted = await note_crud.delete_for_owner(self.db, note_id, owner_id)
        if not deleted:
            raise DocumentNotFoundError("Note", str(note_id))
        await self.db.commit()
        logger.info("Note deleted", extra={"note_id": str(note_id)})

    async def search_notes(self, owner_id: str, query: str | None) -> list[dict]:
        """
        Search the owner's notes by title, content or tag.

        Raises:
            ValidationError: If the query is blank
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query is required", field="query")

        notes = await note_crud.search(self.db, owner_id, query)
        logger.debug("Note search", extra={"query": query, "results": len(notes)})
        return [note_to_dict(n) for n in notes]
