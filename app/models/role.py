"""User role enum for role-based access control."""

from enum import Enum as PyEnum


class UserRole(str, PyEnum):
    """
    Roles a user can hold inside their tenant.

    Permissions:
    - ADMIN: manage users of the tenant, change the subscription,
      send upgrade invitations, plus everything a member can do
    - MEMBER: create, read, update and delete their own notes

    Neither role grants access to another user's notes.
    """

    ADMIN = "admin"
    MEMBER = "member"
