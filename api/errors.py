"""Exceptions raised by the events API client."""
from typing import Any, Optional


class ApiError(Exception):
    """A request to the events API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class InvalidResponseError(ApiError):
    """The server answered with a body that is not valid JSON."""

    def __init__(self, message: str, raw_text: str, status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code, body=raw_text)
        self.raw_text = raw_text


class NotAuthenticatedError(ApiError):
    """No credential is available for a privileged request."""
