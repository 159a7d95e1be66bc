from sqlalchemy.orm import Session
from app.models.note import Note


class NoteRepository:
    """Repository for Note model operations, always scoped to tenant and owner"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_owner(self, tenant_id: str, user_id: str) -> list[Note]:
        """Get all notes of one user in one tenant, newest first"""
        return (
            self.db.query(Note)
            .filter(Note.tenant_id == tenant_id, Note.user_id == user_id)
            .order_by(Note.created_at.desc())
            .all()
        )

    def get_by_id_and_owner(self, note_id: str, tenant_id: str, user_id: str) -> Note | None:
        """
        Get note ensuring it belongs to the user within the tenant.

        Returns None if note doesn't exist, belongs to another tenant,
        or belongs to another user of the same tenant.
        """
        return (
            self.db.query(Note)
            .filter(
                Note.id == note_id,
                Note.tenant_id == tenant_id,
                Note.user_id == user_id,
            )
            .first()
        )

    def count_by_owner(self, tenant_id: str, user_id: str) -> int:
        """Count notes of one user in one tenant"""
        return (
            self.db.query(Note)
            .filter(Note.tenant_id == tenant_id, Note.user_id == user_id)
            .count()
        )

    def create(self, note: Note) -> Note:
        """Create new note and commit the current transaction"""
        self.db.add(note)
        self.db.commit()
        self.db.refresh(note)
        return note

    def update(self, note: Note) -> Note:
        """Update existing note"""
        self.db.commit()
        self.db.refresh(note)
        return note

    def delete(self, note: Note) -> None:
        """Delete note"""
        self.db.delete(note)
        self.db.commit()
