"""Error types for Quotely.

Defines the closed hierarchy of exceptions raised by repositories and
services. Every subclass pins a machine-readable ``kind`` and the HTTP status
the server maps it to, and carries only the fields that kind needs. The
exception message is the human-readable text returned to clients, so it must
never contain internal identifiers or stack details.
"""

from __future__ import annotations

from typing import ClassVar, Optional


class QuotelyError(Exception):
    """Base error for all Quotely domain exceptions."""

    kind: ClassVar[str] = "InternalError"
    status_code: ClassVar[int] = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Render the error in the public ``{error, message}`` shape."""
        return {"error": self.kind, "message": self.message}


class ValidationError(QuotelyError):
    """Raised for malformed or missing input."""

    kind = "ValidationError"
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidCredentials(QuotelyError):
    """Raised when an email/password pair cannot be authenticated."""

    kind = "InvalidCredentials"
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Incorrect email or password")


class AccountInactive(InvalidCredentials):
    """Raised when correct credentials belong to a deactivated account."""

    kind = "AccountInactive"
    status_code = 403

    def __init__(self) -> None:
        QuotelyError.__init__(self, "Your account has been deactivated")


class InvalidToken(QuotelyError):
    """Raised when a bearer token is missing, malformed, forged or expired."""

    kind = "InvalidToken"
    status_code = 401

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class UserNotFound(QuotelyError):
    """Raised when a valid token refers to a missing or inactive user."""

    kind = "UserNotFound"
    status_code = 401

    def __init__(self) -> None:
        super().__init__("User not found or account inactive")


class Forbidden(QuotelyError):
    """Raised when the caller's role does not allow the action."""

    kind = "Forbidden"
    status_code = 403

    def __init__(self, action: str) -> None:
        super().__init__(f"You are not allowed to {action}")
        self.action = action


class NotFound(QuotelyError):
    """Raised when a referenced entity does not exist (or is not visible)."""

    kind = "NotFound"
    status_code = 404

    def __init__(self, entity: str, identifier: object) -> None:
        super().__init__(f"{entity} {identifier} not found")
        self.entity = entity
        self.identifier = identifier


class Conflict(QuotelyError):
    """Raised when a write violates a uniqueness constraint."""

    kind = "Conflict"
    status_code = 409


class InvalidTransition(QuotelyError):
    """Raised when a moderation decision breaks the review lifecycle."""

    kind = "InvalidTransition"
    status_code = 400

    def __init__(self, current: Optional[str], requested: str) -> None:
        if current is None:
            message = f"'{requested}' is not a valid moderation decision"
        else:
            message = f"Cannot move an item from '{current}' to '{requested}'"
        super().__init__(message)
        self.current = current
        self.requested = requested


class InternalError(QuotelyError):
    """Raised for unexpected persistence or server failures."""

    kind = "InternalError"
    status_code = 500

    def __init__(self) -> None:
        super().__init__("An unexpected error occurred")
