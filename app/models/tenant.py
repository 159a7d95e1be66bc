"""Tenant model for multi-tenant isolation."""

from enum import Enum as PyEnum
from sqlalchemy import String, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.models.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.note import Note


class SubscriptionPlan(str, PyEnum):
    """Subscription tiers. Only FREE carries a note quota."""

    FREE = "free"
    PRO = "pro"


class Tenant(Base, TimestampMixin):
    """
    Multi-tenant isolation boundary.

    A tenant is an organization whose users and notes are invisible to
    every other tenant. The slug is the human-readable handle used in
    URLs; it is globally unique and never changes after creation.

    Examples:
    - "acme" / "Acme Corp" on the free plan
    - "globex" / "Globex Corporation" on the pro plan

    Subscription moves FREE -> PRO through an admin-triggered upgrade.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subscription: Mapped[SubscriptionPlan] = mapped_column(
        Enum(SubscriptionPlan, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=SubscriptionPlan.FREE,
    )

    # Relationships
    users: Mapped[list["User"]] = relationship(
        "User",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )
    notes: Mapped[list["Note"]] = relationship(
        "Note",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, slug='{self.slug}', subscription={self.subscription.value})>"
