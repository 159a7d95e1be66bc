from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException
from app.core.permissions import require_admin, require_user_in_tenant
from app.models.session_identity import SessionIdentity
from app.models.tenant import Tenant
from app.repositories.tenant_repository import TenantRepository
from app.repositories.user_repository import UserRepository
from app.schemas.invitation_schemas import InvitationAction, InvitationResponseRequest
from app.services.notification_service import SimulatedUpgradeNotifier
from app.services.tenant_service import TenantService


class InvitationService:
    """Service for upgrade invitations; delivery is delegated to the notifier"""

    def __init__(self, db: Session, notifier: SimulatedUpgradeNotifier):
        self.db = db
        self.notifier = notifier
        self.user_repo = UserRepository(db)
        self.tenant_repo = TenantRepository(db)
        self.tenant_service = TenantService(db)

    def send_invitation(self, user_id: str, message: str, identity: SessionIdentity) -> dict:
        """
        Send an upgrade invitation to a user of the caller's tenant (ADMIN only).

        Raises:
            ForbiddenException: If caller is not an admin or target is in another tenant
            NotFoundException: If the target user does not exist
        """
        require_admin(identity, "Only admins can send upgrade invitations")
        target = require_user_in_tenant(
            self.user_repo.get_by_id(user_id),
            identity,
            "You can only send invitations to users in your own tenant",
        )
        return self.notifier.send_upgrade_invitation(identity, target, message)

    def list_invitations(self, identity: SessionIdentity) -> list[dict]:
        """List upgrade invitations addressed to the caller"""
        tenant = self.tenant_repo.get_by_id(identity.tenant_id)
        if not tenant:
            raise NotFoundException("Tenant not found")

        admin = self.user_repo.get_first_admin(tenant.id)
        return self.notifier.pending_invitations(tenant, admin.email if admin else None)

    def respond(
        self, data: InvitationResponseRequest, identity: SessionIdentity
    ) -> Tenant | None:
        """
        Accept or decline an upgrade invitation.

        Accepting upgrades the caller's tenant and therefore needs the
        admin role. Declining changes nothing.

        Returns:
            The upgraded tenant on accept, None on decline

        Raises:
            ForbiddenException: If a non-admin accepts
        """
        if data.action == InvitationAction.DECLINE:
            return None

        require_admin(
            identity, "Only admins can upgrade subscriptions. Please contact your admin."
        )
        return self.tenant_service.upgrade_own_tenant(identity)
