"""
Note API endpoints.

Routes:
- GET /notes - List notes
- GET /notes/search?query= - Search notes
- GET /notes/{id} - Get note
- POST /notes - Create note
- PUT /notes/{id} - Update note
- DELETE /notes/{id} - Delete note

Dependencies: studybuddy.application.services, studybuddy.models
System role: Note HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from studybuddy.api.deps.auth import get_current_owner_id
from studybuddy.api.deps.dependencies import get_note_service
from studybuddy.api.routers.router_utils import handle_service_errors
from studybuddy.application.services.note_service import NoteService
from studybuddy.models.note import CreateNoteRequest, NoteResponse, UpdateNoteRequest

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=list[NoteResponse])
@handle_service_errors
async def list_notes(
    owner_id: str = Depends(get_current_owner_id),
    note_service: NoteService = Depends(get_note_service),
) -> list[NoteResponse]:
    notes = await note_service.list_notes(owner_id)
    return [NoteResponse(**n) for n in notes]


@router.get("/search", response_model=list[NoteResponse])
@handle_service_errors
async def search_notes(
    query: str | None = None,
    owner_id: str = Depends(get_current_owner_id),
    note_service: NoteService = Depends(get_note_service),
) -> list[NoteResponse]:
    """Case-insensitive search over title, content and tags."""
    notes = await note_service.search_notes(owner_id, query)
    return [NoteResponse(**n) for n in notes]


@router.get("/{note_id}", response_model=NoteResponse)
@handle_service_errors
async def get_note(
    note_id: UUID,
    owner_id: str = Depends(get_current_owner_id),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return NoteResponse(**await note_service.get_note(note_id, owner_id))


@router.post("", response_model=NoteResponse, status_code=201)
@handle_service_errors
async def create_note(
    request: CreateNoteRequest,
    owner_id: str = Depends(get_current_owner_id),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await note_service.create_note(owner_id, request.to_store_fields())
    return NoteResponse(**note)


@router.put("/{note_id}", response_model=NoteResponse)
@handle_service_errors
async def update_note(
    note_id: UUID,
    request: UpdateNoteRequest,
    owner_id: str = Depends(get_current_owner_id),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await note_service.update_note(note_id, owner_id, request.to_store_fields())
    return NoteResponse(**note)


@router.delete("/{note_id}", status_code=204)
@handle_service_errors
async def delete_note(
    note_id: UUID,
    owner_id: str = Depends(get_current_owner_id),
    note_service: NoteService = Depends(get_note_service),
) -> None:
    await note_service.delete_note(note_id, owner_id)
