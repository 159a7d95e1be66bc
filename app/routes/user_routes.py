from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_identity
from app.models.session_identity import SessionIdentity
from app.services.invitation_service import InvitationService
from app.services.notification_service import SimulatedUpgradeNotifier, get_upgrade_notifier
from app.services.user_service import UserService
from app.schemas.invitation_schemas import (
    UpgradeInvitationRequest,
    UpgradeInvitationSentResponse,
)
from app.schemas.user_schemas import (
    UserChangeResponse,
    UserCreate,
    UserCreateResponse,
    UserDeleteResponse,
    UserListResponse,
    UserRoleUpdate,
)

router = APIRouter()


@router.get("", response_model=UserListResponse)
def list_users(
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    List all users of the caller's tenant.

    - **Requires ADMIN permissions**
    """
    service = UserService(db)
    users = service.list_users(identity)
    return UserListResponse(users=users, total=len(users))


@router.post("", response_model=UserCreateResponse)
def create_user(
    data: UserCreate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Create a user in the caller's tenant.

    - **Requires ADMIN permissions**
    - Default role: MEMBER
    - Email must be unique across all tenants (409 otherwise)
    - Without a password, a temporary one is generated and returned once
    """
    service = UserService(db)
    user, temporary_password = service.create_user(data, identity)
    return {
        "message": "User invited successfully",
        "user": user,
        "temporary_password": temporary_password,
    }


@router.put("/{user_id}", response_model=UserChangeResponse)
def update_user_role(
    user_id: str,
    role_update: UserRoleUpdate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Update a user's role.

    - **Requires ADMIN permissions**
    - Target must be in the caller's tenant
    - Cannot change your own role
    """
    service = UserService(db)
    user = service.update_user_role(user_id, role_update, identity)
    return {"message": "User updated successfully", "user": user}


@router.delete("/{user_id}", response_model=UserDeleteResponse)
def delete_user(
    user_id: str,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Delete a user and all of their notes.

    - **Requires ADMIN permissions**
    - Target must be in the caller's tenant
    - Cannot delete yourself
    """
    service = UserService(db)
    service.delete_user(user_id, identity)
    return {"message": "User deleted successfully", "deleted_user_id": user_id}


@router.post("/{user_id}/invite-upgrade", response_model=UpgradeInvitationSentResponse)
def invite_upgrade(
    user_id: str,
    data: UpgradeInvitationRequest | None = None,
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    notifier: SimulatedUpgradeNotifier = Depends(get_upgrade_notifier),
):
    """
    Send an upgrade invitation to a user of the caller's tenant.

    - **Requires ADMIN permissions**
    - Delivery is simulated; nothing is stored
    """
    data = data or UpgradeInvitationRequest()
    service = InvitationService(db, notifier)
    invitation = service.send_invitation(user_id, data.message, identity)
    return {"message": "Upgrade invitation sent successfully", "invitation": invitation}
