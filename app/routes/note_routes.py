from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_identity
from app.models.session_identity import SessionIdentity
from app.services.note_service import NoteService
from app.schemas.note_schemas import (
    NoteCreate,
    NoteUpdate,
    NoteResponse,
    NoteListResponse,
    NoteDeleteResponse,
)

router = APIRouter()


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(
    data: NoteCreate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Create a new note for the authenticated user.

    - Free plan: at most 3 notes per user, the 4th returns 402
    - Pro plan: unlimited
    """
    service = NoteService(db)
    return service.create_note(data, identity)


@router.get("", response_model=NoteListResponse)
def list_notes(
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Get all notes of the authenticated user (never other users' notes)"""
    service = NoteService(db)
    notes = service.get_user_notes(identity)
    return NoteListResponse(notes=notes, total=len(notes))


@router.get("/{note_id}", response_model=NoteResponse)
def get_note(
    note_id: str,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Get specific note; notes of other users return 404"""
    service = NoteService(db)
    return service.get_note(note_id, identity)


@router.put("/{note_id}", response_model=NoteResponse)
def update_note(
    note_id: str,
    data: NoteUpdate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Replace title and content of a note"""
    service = NoteService(db)
    return service.update_note(note_id, data, identity)


@router.delete("/{note_id}", response_model=NoteDeleteResponse)
def delete_note(
    note_id: str,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Delete a note"""
    service = NoteService(db)
    service.delete_note(note_id, identity)
    return {"message": "Note deleted successfully", "deleted_note_id": note_id}
