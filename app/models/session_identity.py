"""Session identity carried by a signed token."""

from dataclasses import dataclass
from app.models.role import UserRole
from app.models.user import User


@dataclass(frozen=True)
class SessionIdentity:
    """
    Snapshot of the authenticated user and tenant for request authorization.

    Built from User + Tenant at login and embedded in the session token.
    It is NOT re-checked against the database on each request, so a role
    change only takes effect once the user logs in again (or the token
    expires).

    Attributes:
        user_id: ID of the authenticated user
        email: The user's email at login time
        role: The user's role at login time
        tenant_id: ID of the user's tenant
        tenant_slug: Slug of the user's tenant
    """

    user_id: str
    email: str
    role: UserRole
    tenant_id: str
    tenant_slug: str

    @classmethod
    def from_user(cls, user: User) -> "SessionIdentity":
        return cls(
            user_id=user.id,
            email=user.email,
            role=user.role,
            tenant_id=user.tenant_id,
            tenant_slug=user.tenant.slug,
        )

    def to_claims(self) -> dict:
        """Claims for the JWT payload; the user id travels as 'sub'."""
        return {
            "sub": self.user_id,
            "email": self.email,
            "role": self.role.value,
            "tenant_id": self.tenant_id,
            "tenant_slug": self.tenant_slug,
        }

    @classmethod
    def from_claims(cls, claims: dict) -> "SessionIdentity":
        """
        Rebuild an identity from decoded claims.

        Raises:
            KeyError: If a claim is missing
            ValueError: If the role claim is not a known role
        """
        return cls(
            user_id=claims["sub"],
            email=claims["email"],
            role=UserRole(claims["role"]),
            tenant_id=claims["tenant_id"],
            tenant_slug=claims["tenant_slug"],
        )

    def is_admin(self) -> bool:
        """Check if user is a tenant admin."""
        return self.role == UserRole.ADMIN

    def belongs_to_tenant(self, tenant_id: str) -> bool:
        return self.tenant_id == tenant_id

    def __repr__(self) -> str:
        return f"<SessionIdentity(user_id={self.user_id}, tenant_id={self.tenant_id}, role={self.role.value})>"
