"""
Upgrade invitation delivery.

Invitations are not stored anywhere: this collaborator stands in for an
external notification service. Sending only logs and returns a receipt;
listing derives a suggestion from the tenant's current plan.
"""

import logging
import secrets
from datetime import datetime, UTC

from app.models.session_identity import SessionIdentity
from app.models.tenant import SubscriptionPlan, Tenant
from app.models.user import User

logger = logging.getLogger(__name__)

SUGGESTED_INVITATION_ID = "upgrade-suggestion"
SUGGESTED_INVITATION_MESSAGE = "Your admin suggests upgrading to Pro for unlimited notes!"


class SimulatedUpgradeNotifier:
    """Notification collaborator that delivers nothing and persists nothing"""

    def send_upgrade_invitation(
        self, sender: SessionIdentity, target: User, message: str
    ) -> dict:
        """Pretend to deliver an invitation and return its receipt"""
        logger.info(
            "Simulated upgrade invitation from %s to %s in tenant %s",
            sender.user_id,
            target.id,
            sender.tenant_slug,
        )
        return {
            "id": f"simulated-{secrets.token_hex(8)}",
            "target_user": target.email,
            "message": message,
            "sent_at": datetime.now(UTC),
        }

    def pending_invitations(self, tenant: Tenant, sender_email: str | None) -> list[dict]:
        """Free tenants get one standing upgrade suggestion, pro tenants none"""
        if tenant.subscription != SubscriptionPlan.FREE:
            return []
        return [
            {
                "id": SUGGESTED_INVITATION_ID,
                "message": SUGGESTED_INVITATION_MESSAGE,
                "from_user": {"email": sender_email},
                "created_at": datetime.now(UTC),
                "status": "pending",
            }
        ]


_notifier = SimulatedUpgradeNotifier()


def get_upgrade_notifier() -> SimulatedUpgradeNotifier:
    """FastAPI dependency; override it to plug in a real delivery service"""
    return _notifier
