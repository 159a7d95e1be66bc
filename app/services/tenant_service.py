import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException, ValidationException
from app.core.permissions import require_admin, require_own_tenant_slug
from app.models.session_identity import SessionIdentity
from app.models.tenant import SubscriptionPlan, Tenant
from app.repositories.note_repository import NoteRepository
from app.repositories.tenant_repository import TenantRepository
from app.schemas.tenant_schemas import TenantUpdate
from app.services.quota_policy import note_limit_for

logger = logging.getLogger(__name__)


class TenantService:
    """Service layer for tenant settings and subscription changes"""

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)
        self.note_repo = NoteRepository(db)

    def _get_own_tenant(self, identity: SessionIdentity) -> Tenant:
        tenant = self.tenant_repo.get_by_id(identity.tenant_id)
        if not tenant or tenant.slug != identity.tenant_slug:
            raise NotFoundException("Tenant not found")
        return tenant

    def get_tenant(self, slug: str, identity: SessionIdentity) -> dict:
        """
        Get tenant details with the caller's quota usage.

        Args:
            slug: Tenant slug from the URL
            identity: Caller's session identity

        Returns:
            Tenant fields plus note_count, note_limit and is_at_limit

        Raises:
            ForbiddenException: If slug is not the caller's tenant
            NotFoundException: If the tenant no longer exists
        """
        require_own_tenant_slug(identity, slug, "You can only view your own tenant")
        tenant = self._get_own_tenant(identity)

        note_count = self.note_repo.count_by_owner(tenant.id, identity.user_id)
        note_limit = note_limit_for(tenant.subscription)
        return {
            "id": tenant.id,
            "slug": tenant.slug,
            "name": tenant.name,
            "subscription": tenant.subscription,
            "note_count": note_count,
            "note_limit": note_limit,
            "is_at_limit": note_limit is not None and note_count >= note_limit,
        }

    def update_tenant(
        self, slug: str, tenant_update: TenantUpdate, identity: SessionIdentity
    ) -> Tenant:
        """
        Update subscription and optionally name (ADMIN only).

        Subscriptions only move forward: free -> pro. Asking for the
        current plan is a no-op.

        Raises:
            ForbiddenException: If caller is not an admin of this tenant
            ValidationException: If asked to downgrade from pro
            NotFoundException: If the tenant no longer exists
        """
        require_admin(identity, "Only admins can update tenant settings")
        require_own_tenant_slug(identity, slug, "You can only update your own tenant")
        tenant = self._get_own_tenant(identity)

        if (
            tenant.subscription == SubscriptionPlan.PRO
            and tenant_update.subscription == SubscriptionPlan.FREE
        ):
            raise ValidationException("Downgrading from pro to free is not supported")

        tenant.subscription = tenant_update.subscription
        if tenant_update.name is not None:
            tenant.name = tenant_update.name

        tenant = self.tenant_repo.update(tenant)
        logger.info(
            "Tenant %s updated by %s (subscription=%s)",
            tenant.slug,
            identity.user_id,
            tenant.subscription.value,
        )
        return tenant

    def upgrade_tenant(self, slug: str, identity: SessionIdentity) -> Tenant:
        """
        Move the caller's tenant to the pro plan (ADMIN only).

        Raises:
            ForbiddenException: If caller is not an admin of this tenant
            NotFoundException: If the tenant no longer exists
        """
        require_admin(identity, "Only admins can upgrade subscriptions")
        require_own_tenant_slug(identity, slug, "You can only upgrade your own tenant")
        return self.upgrade_own_tenant(identity)

    def upgrade_own_tenant(self, identity: SessionIdentity) -> Tenant:
        """Set the caller's tenant to pro; callers check the admin role first"""
        tenant = self._get_own_tenant(identity)
        if tenant.subscription == SubscriptionPlan.PRO:
            return tenant

        tenant.subscription = SubscriptionPlan.PRO
        tenant = self.tenant_repo.update(tenant)
        logger.info("Tenant %s upgraded to pro by %s", tenant.slug, identity.user_id)
        return tenant
