"""Error taxonomy shared by the extractor services and the HTTP layer.

Every operational error carries an HTTP status and optional details so the
API can render it without knowing where it was raised.
"""

from __future__ import annotations

from typing import Any, Optional


class AppError(Exception):
    """Base class for expected, operational failures."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ValidationError(AppError):
    """Malformed or missing required input."""

    status_code = 400

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, details=details)


class UnauthorizedError(AppError):
    """Missing or rejected credentials."""

    status_code = 401

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, details=details)


class NotFoundError(AppError):
    """Lookup miss on an id-addressed operation."""

    status_code = 404

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, details=details)


class ExternalAPIError(AppError):
    """A remote collaborator (Figma, completion API) failed or was unreachable."""

    status_code = 502
