"""
gladiator/core/schemas.py

Core Schemas

Defines core Pydantic models used across the application, including:
- Generic message response schema.
- Tagged error envelope returned for every domain error.
- Identity and current-user models resolved from the hosted auth provider.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from gladiator.database.enums import UserRole


class MessageResponse(BaseModel):
    """
    Generic response schema for simple success or informational messages.
    """

    detail: str = Field(..., description="Response message detail")


class ErrorBody(BaseModel):
    kind: str = Field(..., description="Error category (validation, authorization, conflict, ...)")
    code: str = Field(..., description="Specific error code, e.g. already_reviewed")
    message: str = Field(..., description="Human readable message")


class ErrorResponse(BaseModel):
    """Tagged error result returned instead of a raw exception."""

    error: ErrorBody


class Identity(BaseModel):
    """Authenticated identity as asserted by the hosted auth provider."""

    id: UUID
    email: str | None = None


class CurrentUser(BaseModel):
    """Authenticated identity joined with its profile role."""

    id: UUID
    role: UserRole
    email: str | None = None
