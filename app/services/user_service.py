import logging
import secrets

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictException
from app.core.permissions import forbid_self_action, require_admin, require_user_in_tenant
from app.core.security import hash_password
from app.models.session_identity import SessionIdentity
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user_schemas import UserCreate, UserRoleUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user management inside a tenant (ADMIN only)"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)

    def list_users(self, identity: SessionIdentity) -> list[User]:
        """
        List all users of the caller's tenant.

        Raises:
            ForbiddenException: If caller is not an admin
        """
        require_admin(identity, "Only admins can view user list")
        return self.repo.get_by_tenant(identity.tenant_id)

    def create_user(self, data: UserCreate, identity: SessionIdentity) -> tuple[User, str | None]:
        """
        Create a user in the caller's tenant.

        Args:
            data: Email, role and optional password
            identity: Caller's session identity

        Returns:
            Tuple of (created user, generated temporary password or None)

        Raises:
            ForbiddenException: If caller is not an admin
            ConflictException: If the email is taken in any tenant
        """
        require_admin(identity, "Only admins can invite users")

        if self.repo.get_by_email(data.email):
            raise ConflictException("User with this email already exists")

        temporary_password = None
        password = data.password
        if password is None:
            temporary_password = secrets.token_urlsafe(12)
            password = temporary_password

        user = User(
            email=data.email,
            password_hash=hash_password(password),
            role=data.role,
            tenant_id=identity.tenant_id,
        )
        user = self.repo.create(user)
        logger.info(
            "User %s created in tenant %s by %s", user.id, identity.tenant_slug, identity.user_id
        )
        return user, temporary_password

    def get_tenant_user(self, user_id: str, identity: SessionIdentity, message: str) -> User:
        """
        Get a user of the caller's tenant.

        Raises:
            NotFoundException: If user does not exist
            ForbiddenException: If user belongs to another tenant
        """
        target = self.repo.get_by_id(user_id)
        return require_user_in_tenant(target, identity, message)

    def update_user_role(
        self, user_id: str, role_update: UserRoleUpdate, identity: SessionIdentity
    ) -> User:
        """
        Change another user's role.

        Raises:
            ForbiddenException: If caller is not an admin or target is in another tenant
            NotFoundException: If user does not exist
            ValidationException: If caller targets themselves
        """
        require_admin(identity, "Only admins can update users")
        target = self.get_tenant_user(
            user_id, identity, "You can only update users from your own tenant"
        )
        forbid_self_action(identity, target.id, "You cannot change your own role")

        target.role = role_update.role
        target = self.repo.update(target)
        logger.info(
            "User %s role set to %s by %s", target.id, target.role.value, identity.user_id
        )
        return target

    def delete_user(self, user_id: str, identity: SessionIdentity) -> None:
        """
        Delete another user of the tenant together with their notes.

        Raises:
            ForbiddenException: If caller is not an admin or target is in another tenant
            NotFoundException: If user does not exist
            ValidationException: If caller targets themselves
        """
        require_admin(identity, "Only admins can delete users")
        target = self.get_tenant_user(
            user_id, identity, "You can only delete users from your own tenant"
        )
        forbid_self_action(identity, target.id, "You cannot delete yourself")

        self.repo.delete(target)
        logger.info("User %s deleted by %s", user_id, identity.user_id)
