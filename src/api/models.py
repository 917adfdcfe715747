"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Password confirmation and identifier classification are checked by the
domain layer so both flows share one set of rules.
"""

from pydantic import BaseModel, Field

from src.domain.identifiers import MAX_ROLL_NUMBER_DIGITS

# RFC 5321 path limit; also bounds the digit string for roll numbers
MAX_IDENTIFIER_LENGTH = 254


class SendCodeRequest(BaseModel):
    """Request model for starting the code flow."""

    identifier: str = Field(
        ..., min_length=1, max_length=MAX_IDENTIFIER_LENGTH, description="Email address or roll number"
    )


class CreateUserRequest(BaseModel):
    """Request model for completing the code flow."""

    identifier: str = Field(
        ..., min_length=1, max_length=MAX_IDENTIFIER_LENGTH, description="Email address or roll number"
    )
    name: str = Field(..., min_length=1, description="Display name")
    password: str = Field(..., description="Password (min 8 characters)")
    confirm_password: str
    otp: str = Field(..., description="6-digit verification code")


class VerifyLinkRequest(BaseModel):
    """Request model for issuing a verification link."""

    roll_number: str = Field(
        ..., min_length=1, max_length=MAX_ROLL_NUMBER_DIGITS, description="Numeric roll number"
    )


class CompleteLinkRequest(BaseModel):
    """Request model for completing the link flow."""

    token: str = Field(..., min_length=1, description="Token from the verification link")
    name: str = Field(..., min_length=1)
    password: str
    confirm_password: str


class LoginRequest(BaseModel):
    """Request model for password login by email or roll number."""

    identifier: str = Field(..., max_length=MAX_IDENTIFIER_LENGTH, description="Email address or roll number")
    password: str


class MessageResponse(BaseModel):
    """Response model for successful transitions."""

    message: str


class AccountResponse(BaseModel):
    """Public fields of an authenticated account."""

    id: int
    name: str
    email: str | None = None
    roll_number: int | None = None


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
