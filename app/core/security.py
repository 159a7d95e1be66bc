import logging
from datetime import datetime, timedelta, UTC

import bcrypt
from jose import JWTError, jwt

from app.config import settings
from app.core.exceptions import UnauthorizedException
from app.models.session_identity import SessionIdentity

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_TTL = timedelta(hours=24)
TOKEN_COOKIE_NAME = "token"

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

_REQUIRED_CLAIMS = ("sub", "email", "role", "tenant_id", "tenant_slug")


# ── Password hashing (bcrypt) ────────────────────────────────


def hash_password(password: str) -> str:
    """Hash a password with bcrypt at the configured cost factor."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against its bcrypt hash.

    Returns False instead of raising for malformed hashes or
    over-long passwords.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


# ── Session tokens (JWT) ─────────────────────────────────────


def create_access_token(identity: SessionIdentity, issued_at: datetime | None = None) -> str:
    """
    Sign a session token carrying the identity claims.

    Args:
        identity: Claims snapshot to embed
        issued_at: Issue time, defaults to now (tests pass a past time)

    Returns:
        Encoded JWT valid for 24 hours from issue time
    """
    now = issued_at or datetime.now(UTC)
    payload = identity.to_claims()
    payload.update({"iat": now, "exp": now + ACCESS_TOKEN_TTL})
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_jwt(token: str) -> dict:
    """
    Decode and validate JWT token using SECRET_KEY.

    Args:
        token: JWT from Authorization header or cookie

    Returns:
        Decoded token payload with 'sub' (user_id), 'exp', etc.

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {str(e)}")

    # jose checks exp when present, but does not require it
    if payload.get("exp") is None:
        raise UnauthorizedException("Token missing expiration")

    if payload.get("sub") is None:
        raise UnauthorizedException("Token missing user identifier")

    return payload


def validate_token(token: str) -> SessionIdentity | None:
    """
    Resolve a token to a SessionIdentity.

    Every failure (malformed, bad signature, expired, missing or invalid
    claim) returns None; callers cannot tell the cases apart.
    """
    try:
        payload = decode_jwt(token)
        missing = [claim for claim in _REQUIRED_CLAIMS if not isinstance(payload.get(claim), str)]
        if missing:
            raise UnauthorizedException(f"Token missing claims: {', '.join(missing)}")
        return SessionIdentity.from_claims(payload)
    except (UnauthorizedException, ValueError) as e:
        logger.debug("Rejected session token: %s", e)
        return None
