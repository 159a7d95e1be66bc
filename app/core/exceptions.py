class NotesServiceException(Exception):
    """Base exception for the notes service"""

    pass


class UnauthorizedException(NotesServiceException):
    """Raised when no valid session token accompanies the request"""

    pass


class NotFoundException(NotesServiceException):
    """Raised when resource not found, or hidden from the caller for isolation"""

    pass


class ForbiddenException(NotesServiceException):
    """Raised when an authenticated user lacks the role or tenant for an action"""

    pass


class ValidationException(NotesServiceException):
    """Raised for malformed input and disallowed self-actions"""

    pass


class ConflictException(NotesServiceException):
    """Raised when a unique key (e.g. email) is already taken"""

    pass


class QuotaExceededException(NotesServiceException):
    """Raised when a free-plan user has reached the note limit"""

    pass
