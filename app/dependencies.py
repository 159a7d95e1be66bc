from fastapi import Cookie, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.security import TOKEN_COOKIE_NAME, validate_token
from app.core.exceptions import UnauthorizedException
from app.models.session_identity import SessionIdentity

# auto_error=False: a missing header falls through to the cookie
security = HTTPBearer(auto_error=False)


def resolve_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    token_cookie: str | None = Cookie(default=None, alias=TOKEN_COOKIE_NAME),
) -> SessionIdentity | None:
    """
    Resolve the caller's identity from the request.

    Flow:
    1. Take the token from Authorization: Bearer <token>, if present
    2. Otherwise take it from the 'token' cookie
    3. Validate signature and expiry with SECRET_KEY
    4. Return the claims as a SessionIdentity

    Returns:
        SessionIdentity, or None for anonymous requests and for any
        invalid, expired or tampered token
    """
    token = credentials.credentials if credentials else token_cookie
    if not token:
        return None
    return validate_token(token)


def get_current_identity(
    identity: SessionIdentity | None = Depends(resolve_identity),
) -> SessionIdentity:
    """
    FastAPI dependency for endpoints that require authentication.

    Raises:
        UnauthorizedException: If no valid session token was presented
    """
    if identity is None:
        raise UnauthorizedException("Unauthorized")
    return identity
