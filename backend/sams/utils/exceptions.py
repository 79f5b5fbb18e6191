"""Application exceptions mapped to HTTP responses by the app factory."""
from typing import List, Dict, Optional


class SamsError(Exception):
    """Base class for errors that carry an HTTP status."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(SamsError):
    """Referenced user, course, exam or session does not exist."""

    status_code = 404


class ConflictError(SamsError):
    """Write would violate a uniqueness constraint."""

    status_code = 409


class ValidationError(SamsError):
    """Malformed request payload."""

    status_code = 400

    def __init__(self, message: str, details: List[Dict[str, str]] = None):
        super().__init__(message)
        self.details = details or []
