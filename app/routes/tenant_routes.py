from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_identity
from app.models.session_identity import SessionIdentity
from app.services.tenant_service import TenantService
from app.schemas.tenant_schemas import (
    TenantResponse,
    TenantUpdate,
    TenantChangeResponse,
)

router = APIRouter()


@router.get("/{slug}", response_model=TenantResponse)
def get_tenant(
    slug: str,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Get tenant details.

    - Only the caller's own tenant (403 otherwise)
    - Includes the caller's note count and plan limit
    """
    service = TenantService(db)
    return service.get_tenant(slug, identity)


@router.put("/{slug}", response_model=TenantChangeResponse)
def update_tenant(
    slug: str,
    tenant_update: TenantUpdate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Update tenant subscription.

    - **Requires ADMIN permissions**
    - subscription must be "free" or "pro"; pro cannot go back to free
    - name may be changed at the same time; slug never changes
    """
    service = TenantService(db)
    tenant = service.update_tenant(slug, tenant_update, identity)
    return {"message": "Tenant subscription updated successfully", "tenant": tenant}


@router.post("/{slug}/upgrade", response_model=TenantChangeResponse)
def upgrade_tenant(
    slug: str,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Upgrade tenant to the pro plan.

    - **Requires ADMIN permissions**
    - Idempotent: upgrading a pro tenant succeeds without changes
    """
    service = TenantService(db)
    tenant = service.upgrade_tenant(slug, identity)
    return {"message": "Subscription upgraded successfully", "tenant": tenant}
