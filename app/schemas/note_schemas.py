from datetime import datetime
from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    """Schema for creating a new note"""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class NoteUpdate(BaseModel):
    """Schema for replacing a note's title and content"""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class NoteResponse(BaseModel):
    """Schema for note response"""

    id: str
    title: str
    content: str
    user_id: str
    owner_email: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class NoteListResponse(BaseModel):
    """Schema for list of notes"""

    notes: list[NoteResponse]
    total: int


class NoteDeleteResponse(BaseModel):
    """Response after deleting a note"""

    message: str
    deleted_note_id: str
