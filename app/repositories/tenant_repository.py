"""Repository for Tenant model operations."""

from sqlalchemy.orm import Session
from app.models.tenant import Tenant


class TenantRepository:
    """Repository for Tenant model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, tenant_id: str) -> Tenant | None:
        """
        Get tenant by ID.

        Args:
            tenant_id: Tenant ID

        Returns:
            Tenant object or None if not found
        """
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    def get_by_id_for_update(self, tenant_id: str) -> Tenant | None:
        """
        Get tenant by ID and lock its row until the current transaction ends.

        Used to serialize note creation within a tenant so the quota
        count and the insert cannot interleave with another request.
        SQLite has no row locks; engines set up with configure_sqlite take
        the database write lock when the transaction begins instead.
        """
        return (
            self.db.query(Tenant)
            .filter(Tenant.id == tenant_id)
            .with_for_update()
            .first()
        )

    def update(self, tenant: Tenant) -> Tenant:
        """
        Update an existing tenant.

        Args:
            tenant: Tenant object with updated fields

        Returns:
            Updated Tenant object
        """
        self.db.commit()
        self.db.refresh(tenant)
        return tenant
