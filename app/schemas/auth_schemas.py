from pydantic import BaseModel, Field, field_validator

from app.models.role import UserRole
from app.schemas.tenant_schemas import TenantSummary

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def normalize_email(value: str) -> str:
    return value.strip().lower()


class LoginRequest(BaseModel):
    """Credentials for POST /api/auth/login"""

    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)


class LoginUser(BaseModel):
    """Logged-in user with their tenant"""

    id: str
    email: str
    role: UserRole
    tenant: TenantSummary

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    """Login result; the token is also set as an http-only cookie"""

    user: LoginUser
    token: str


class IdentityResponse(BaseModel):
    """Claims of the current session token"""

    user_id: str
    email: str
    role: UserRole
    tenant_id: str
    tenant_slug: str

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
