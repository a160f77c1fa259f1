"""
core/exceptions.py

Error taxonomy shared by every service.

Each error carries a coarse `kind` (validation, authorization, conflict,
not_found, transport), a specific `code` and the HTTP status used when the
error crosses the API boundary. The handlers in main.py render them as a
tagged result: {"error": {"kind": ..., "code": ..., "message": ...}}.
"""

from typing import Any

from fastapi import status


class GladiatorError(Exception):
    """Base class for all domain errors."""

    kind: str = "error"
    code: str = "error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Unexpected error"

    def __init__(self, message: str | None = None, *, code: str | None = None) -> None:
        self.message = message or self.default_message
        if code:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "code": self.code, "message": self.message}


# ---------------------------------------------------
# Validation
# ---------------------------------------------------
class ValidationError(GladiatorError):
    """Malformed input. Shown inline, never propagated further."""

    kind = "validation"
    code = "invalid_input"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class InvalidRating(ValidationError):
    code = "invalid_rating"
    default_message = "Rating must be an integer between 1 and 5"


class InvalidAmount(ValidationError):
    code = "invalid_amount"
    default_message = "Amount must be greater than zero"


class EmptyField(ValidationError):
    code = "empty_field"

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"'{field}' must not be empty")


class CryptoNotAccepted(ValidationError):
    code = "crypto_not_accepted"
    default_message = "This professional does not accept crypto payments"


class InvalidFile(ValidationError):
    code = "invalid_file"
    default_message = "Invalid file"


# ---------------------------------------------------
# Authorization
# ---------------------------------------------------
class AuthorizationError(GladiatorError):
    """Acting identity lacks the required role or ownership."""

    kind = "authorization"
    code = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to perform this action"


class AuthenticationError(AuthorizationError):
    code = "not_authenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class NotAClient(AuthorizationError):
    code = "not_a_client"
    default_message = "Only clients can perform this action"


class NotAProfessional(AuthorizationError):
    code = "not_a_professional"
    default_message = "Only professionals can perform this action"


class NotOwner(AuthorizationError):
    code = "not_owner"
    default_message = "Only the owner can modify this record"


class NotReviewAuthor(NotOwner):
    default_message = "Only the author can modify this review"


# ---------------------------------------------------
# Conflict
# ---------------------------------------------------
class ConflictError(GladiatorError):
    kind = "conflict"
    code = "conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "The record conflicts with existing data"


class ConstraintViolation(ConflictError):
    """Raised by a data store when a table constraint rejects a write."""

    code = "constraint_violation"

    def __init__(self, table: str, columns: tuple[str, ...] = ()) -> None:
        self.table = table
        self.columns = columns
        if columns:
            super().__init__(f"Duplicate {', '.join(columns)} in '{table}'")
        else:
            super().__init__(f"Constraint violated on '{table}'")


class AlreadyReviewed(ConflictError):
    code = "already_reviewed"
    default_message = "You have already reviewed this professional"


# ---------------------------------------------------
# Not Found
# ---------------------------------------------------
class NotFoundError(GladiatorError):
    kind = "not_found"
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


# ---------------------------------------------------
# Transport
# ---------------------------------------------------
class TransportError(GladiatorError):
    """The remote call itself failed."""

    kind = "transport"
    code = "transport"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "The data service is unavailable"
