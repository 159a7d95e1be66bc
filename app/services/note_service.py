from sqlalchemy.orm import Session

from app.core.exceptions import (
    NotFoundException,
    QuotaExceededException,
    UnauthorizedException,
)
from app.core.permissions import require_existing_caller, require_visible_note
from app.models.note import Note
from app.models.session_identity import SessionIdentity
from app.repositories.note_repository import NoteRepository
from app.repositories.tenant_repository import TenantRepository
from app.repositories.user_repository import UserRepository
from app.schemas.note_schemas import NoteCreate, NoteUpdate
from app.services.quota_policy import QuotaPolicy


class NoteService:
    """Service for note business logic; every note is private to its owner"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NoteRepository(db)
        self.tenant_repo = TenantRepository(db)
        self.user_repo = UserRepository(db)
        self.quota = QuotaPolicy(db)

    def create_note(self, data: NoteCreate, identity: SessionIdentity) -> Note:
        """
        Create a note for the caller, subject to the plan quota.

        The tenant row stays locked from the quota count until the insert
        commits, so two concurrent creates by the same user cannot both
        pass a count of limit - 1.

        Raises:
            NotFoundException: If the caller's tenant no longer exists
            UnauthorizedException: If the caller's account was deleted
            QuotaExceededException: If the free-plan limit is reached
        """
        tenant = self.tenant_repo.get_by_id_for_update(identity.tenant_id)
        if not tenant:
            self.db.rollback()
            raise NotFoundException("Tenant not found")

        try:
            require_existing_caller(self.user_repo.get_by_id(identity.user_id), identity)
            self.quota.check_note_quota(tenant, identity.user_id)
        except (UnauthorizedException, QuotaExceededException):
            self.db.rollback()
            raise

        note = Note(
            title=data.title,
            content=data.content,
            user_id=identity.user_id,
            tenant_id=identity.tenant_id,
        )
        return self.repo.create(note)

    def get_user_notes(self, identity: SessionIdentity) -> list[Note]:
        """Get all notes owned by the caller"""
        return self.repo.get_by_owner(identity.tenant_id, identity.user_id)

    def get_note(self, note_id: str, identity: SessionIdentity) -> Note:
        """
        Get specific note ensuring caller ownership.

        Raises:
            NotFoundException: If note not found, in another tenant,
                or owned by another user
        """
        note = self.repo.get_by_id_and_owner(note_id, identity.tenant_id, identity.user_id)
        return require_visible_note(note)

    def update_note(self, note_id: str, data: NoteUpdate, identity: SessionIdentity) -> Note:
        """Replace title and content of the caller's note"""
        note = self.get_note(note_id, identity)
        note.title = data.title
        note.content = data.content
        return self.repo.update(note)

    def delete_note(self, note_id: str, identity: SessionIdentity) -> None:
        """Delete the caller's note"""
        note = self.get_note(note_id, identity)
        self.repo.delete(note)
