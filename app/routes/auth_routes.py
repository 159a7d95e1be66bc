from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.config import settings
from app.core.security import ACCESS_TOKEN_TTL, TOKEN_COOKIE_NAME
from app.database import get_db
from app.dependencies import get_current_identity
from app.models.session_identity import SessionIdentity
from app.services.auth_service import AuthService
from app.schemas.auth_schemas import (
    IdentityResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """
    Authenticate with email + password.

    - Returns the user, their tenant and a session token
    - Also sets the token as an http-only cookie valid for 24 hours
    - Unknown email and wrong password both return 401 "Invalid credentials"
    """
    service = AuthService(db)
    user, token = service.login(data.email, data.password)

    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        max_age=int(ACCESS_TOKEN_TTL.total_seconds()),
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )
    return {"user": user, "token": token}


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    """Clear the session cookie. Bearer tokens stay valid until they expire."""
    response.delete_cookie(
        key=TOKEN_COOKIE_NAME,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )
    return {"message": "Logged out"}


@router.get("/me", response_model=IdentityResponse)
def get_me(identity: SessionIdentity = Depends(get_current_identity)):
    """Return the claims of the current session token"""
    return identity
