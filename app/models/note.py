from sqlalchemy import String, ForeignKey, Text, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from app.models.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.tenant import Tenant


class Note(Base, TimestampMixin):
    """
    A note owned by a single user.

    tenant_id is denormalized from the owner so that every lookup can be
    scoped by (tenant_id, user_id) in one query. It always equals the
    owner's tenant.
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="notes")
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="notes")

    # Every note query filters on both columns
    __table_args__ = (Index("ix_notes_tenant_user", "tenant_id", "user_id"),)

    @property
    def owner_email(self) -> str:
        return self.user.email
