from typing import Iterable, Optional


class UserPortalError(Exception):
    """Base class for failures surfaced to the page views."""


class NetworkError(UserPortalError):
    """The API could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(UserPortalError):
    def __init__(self, user_id):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class ValidationError(UserPortalError):
    """Required fields missing; raised before any request is made."""

    def __init__(self, message: str, missing: Iterable[str] = ()):
        super().__init__(message)
        self.missing = list(missing)
