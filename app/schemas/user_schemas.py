from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from app.core.security import MAX_PASSWORD_BYTES
from app.models.role import UserRole
from app.schemas.auth_schemas import EMAIL_PATTERN, normalize_email


class UserResponse(BaseModel):
    """User projection; never includes the password hash"""

    id: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    users: list[UserResponse]
    total: int


class UserCreate(BaseModel):
    """Create a user in the admin's tenant"""

    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    role: UserRole = Field(default=UserRole.MEMBER, description="Role to assign (default: MEMBER)")
    password: str | None = Field(
        None,
        min_length=8,
        description="Initial password; a temporary one is generated when omitted",
    )

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str | None) -> str | None:
        if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class UserCreateResponse(BaseModel):
    """
    Response after creating a user.

    temporary_password is only present when the server generated the
    password, and is shown this one time.
    """

    message: str
    user: UserResponse
    temporary_password: str | None = None


class UserRoleUpdate(BaseModel):
    """Change a user's role (ADMIN only)"""

    role: UserRole = Field(..., description="New role to assign")


class UserChangeResponse(BaseModel):
    message: str
    user: UserResponse


class UserDeleteResponse(BaseModel):
    """Response after deleting a user"""

    message: str
    deleted_user_id: str
