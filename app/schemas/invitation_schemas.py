from datetime import datetime
from enum import Enum as PyEnum
from pydantic import BaseModel, Field

from app.schemas.tenant_schemas import TenantSummary


class InvitationAction(str, PyEnum):
    ACCEPT = "accept"
    DECLINE = "decline"


class UpgradeInvitationRequest(BaseModel):
    """Optional message sent along with an upgrade invitation"""

    message: str = Field(
        default="The admin has invited you to consider upgrading to Pro for unlimited notes!",
        min_length=1,
        max_length=1000,
    )


class UpgradeInvitationReceipt(BaseModel):
    """Simulated delivery receipt; nothing is stored"""

    id: str
    target_user: str
    message: str
    sent_at: datetime


class UpgradeInvitationSentResponse(BaseModel):
    message: str
    invitation: UpgradeInvitationReceipt


class InvitationSender(BaseModel):
    email: str | None


class UpgradeInvitation(BaseModel):
    """Pending upgrade suggestion shown to users of free tenants"""

    id: str
    message: str
    from_user: InvitationSender
    created_at: datetime
    status: str = "pending"


class UpgradeInvitationListResponse(BaseModel):
    invitations: list[UpgradeInvitation]


class InvitationResponseRequest(BaseModel):
    """Accept or decline an upgrade invitation"""

    invitation_id: str = Field(..., min_length=1)
    action: InvitationAction


class InvitationResponseResult(BaseModel):
    message: str
    tenant: TenantSummary | None = None
