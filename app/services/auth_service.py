import logging
from functools import lru_cache

from sqlalchemy.orm import Session

from app.core.exceptions import UnauthorizedException
from app.core.security import create_access_token, hash_password, verify_password
from app.models.session_identity import SessionIdentity
from app.models.user import User
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache
def _dummy_password_hash() -> str:
    """Hash checked for unknown emails so both failure paths cost the same"""
    return hash_password("not-a-real-password")


class AuthService:
    """Service for credential checks and session token issue"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """
        Authenticate with email + password.

        Unknown email and wrong password produce the same error so the
        response does not reveal which accounts exist.

        Returns:
            Tuple of (user, signed session token)

        Raises:
            UnauthorizedException: If the credentials do not match
        """
        user = self.user_repo.get_by_email(email)

        if user is None:
            verify_password(password, _dummy_password_hash())
            logger.info("Login failed: unknown account")
            raise UnauthorizedException(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            logger.info("Login failed for user %s: wrong password", user.id)
            raise UnauthorizedException(INVALID_CREDENTIALS)

        token = create_access_token(SessionIdentity.from_user(user))
        logger.info("User %s logged in to tenant %s", user.id, user.tenant.slug)
        return user, token
