"""
Authorization checks shared by the resource services.

Each helper enforces one rule and raises the matching exception. Services
call them in a fixed order: role, then target lookup, then tenant, then
self-action, so the first failing rule decides the response.
"""

from app.core.exceptions import (
    ForbiddenException,
    UnauthorizedException,
    NotFoundException,
    ValidationException,
)
from app.models.note import Note
from app.models.session_identity import SessionIdentity
from app.models.user import User


def require_admin(identity: SessionIdentity, message: str) -> None:
    """
    Reject non-admin callers.

    Raises:
        ForbiddenException: If the caller is not an admin
    """
    if not identity.is_admin():
        raise ForbiddenException(message)


def require_own_tenant_slug(identity: SessionIdentity, slug: str, message: str) -> None:
    """
    Tenant settings are addressed by slug. A tenant's existence is not
    secret, so a mismatch is Forbidden rather than NotFound.
    """
    if identity.tenant_slug != slug:
        raise ForbiddenException(message)


def require_visible_note(note: Note | None) -> Note:
    """
    Owner isolation for notes.

    Note lookups go through NoteRepository.get_by_id_and_owner, which
    filters on tenant and owner, so a note in another tenant or owned by
    another user of the same tenant (admins included) arrives here as
    None and is reported exactly like a missing one.

    Raises:
        NotFoundException: If no note of the caller matched
    """
    if note is None:
        raise NotFoundException("Note not found")
    return note


def require_user_in_tenant(target: User | None, identity: SessionIdentity, message: str) -> User:
    """
    Admin actions only apply to users of the admin's own tenant.

    Raises:
        NotFoundException: If the target user does not exist
        ForbiddenException: If the target belongs to another tenant
    """
    if target is None:
        raise NotFoundException("User not found")
    if not identity.belongs_to_tenant(target.tenant_id):
        raise ForbiddenException(message)
    return target


def forbid_self_action(identity: SessionIdentity, target_user_id: str, message: str) -> None:
    """
    An admin may not demote or delete themselves. The caller is authorized
    in general, so this is a bad request rather than Forbidden.
    """
    if identity.user_id == target_user_id:
        raise ValidationException(message)


def require_existing_caller(user: User | None, identity: SessionIdentity) -> User:
    """
    The token outlives the account it was issued for. Writes that attach
    data to the caller check the account still exists in the token's tenant.

    Raises:
        UnauthorizedException: If the caller's account is gone or has moved
    """
    if user is None or user.tenant_id != identity.tenant_id:
        raise UnauthorizedException("Unauthorized")
    return user
