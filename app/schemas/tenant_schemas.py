from pydantic import BaseModel, Field
from app.models.tenant import SubscriptionPlan


class TenantSummary(BaseModel):
    """Tenant fields returned with login and subscription changes"""

    id: str
    slug: str
    name: str
    subscription: SubscriptionPlan

    model_config = {"from_attributes": True}


class TenantResponse(TenantSummary):
    """
    Tenant details with the caller's quota usage.

    Quota is per user, so note_count and is_at_limit describe the caller.
    note_limit is None on the pro plan.
    """

    note_count: int
    note_limit: int | None
    is_at_limit: bool


class TenantUpdate(BaseModel):
    """Update subscription (and optionally name) of a tenant (ADMIN only)"""

    subscription: SubscriptionPlan
    name: str | None = Field(None, min_length=1, max_length=255)


class TenantChangeResponse(BaseModel):
    """Response after updating or upgrading a tenant"""

    message: str
    tenant: TenantSummary
