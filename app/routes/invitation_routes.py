from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_identity
from app.models.session_identity import SessionIdentity
from app.services.invitation_service import InvitationService
from app.services.notification_service import SimulatedUpgradeNotifier, get_upgrade_notifier
from app.schemas.invitation_schemas import (
    InvitationResponseRequest,
    InvitationResponseResult,
    UpgradeInvitationListResponse,
)

router = APIRouter()


@router.get("", response_model=UpgradeInvitationListResponse)
def list_invitations(
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    notifier: SimulatedUpgradeNotifier = Depends(get_upgrade_notifier),
):
    """Upgrade invitations for the caller; one pending suggestion on the free plan"""
    service = InvitationService(db, notifier)
    return {"invitations": service.list_invitations(identity)}


@router.post("", response_model=InvitationResponseResult)
def respond_to_invitation(
    data: InvitationResponseRequest,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    notifier: SimulatedUpgradeNotifier = Depends(get_upgrade_notifier),
):
    """
    Accept or decline an upgrade invitation.

    - action: "accept" or "decline"
    - Accepting upgrades the tenant and **requires ADMIN permissions**
    """
    service = InvitationService(db, notifier)
    tenant = service.respond(data, identity)
    if tenant is None:
        return {"message": "Upgrade invitation declined"}
    return {"message": "Subscription upgraded successfully!", "tenant": tenant}
