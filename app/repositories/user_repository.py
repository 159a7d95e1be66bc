from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictException
from app.models.role import UserRole
from app.models.user import User


class UserRepository:
    """Repository for User model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> User | None:
        """Get user by ID, in any tenant (callers check the tenant)"""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        """Get user by email, case-insensitively"""
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def get_by_tenant(self, tenant_id: str) -> list[User]:
        """Get all users of a tenant, newest first"""
        return (
            self.db.query(User)
            .filter(User.tenant_id == tenant_id)
            .order_by(User.created_at.desc())
            .all()
        )

    def get_first_admin(self, tenant_id: str) -> User | None:
        """Get the longest-standing admin of a tenant"""
        return (
            self.db.query(User)
            .filter(User.tenant_id == tenant_id, User.role == UserRole.ADMIN)
            .order_by(User.created_at.asc())
            .first()
        )

    def create(self, user: User) -> User:
        """
        Create new user.

        Raises:
            ConflictException: If the email is taken (unique index), which
                covers a concurrent create that slipped past the lookup
        """
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictException("User with this email already exists")
        self.db.refresh(user)
        return user

    def update(self, user: User) -> User:
        """Update existing user"""
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        """Delete user (cascades to notes)"""
        self.db.delete(user)
        self.db.commit()
