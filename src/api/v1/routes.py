"""
API v1 routes.

Defines REST endpoints for code-based and link-based registration, and
password login for registered accounts.
Domain errors are mapped to HTTP responses here; infrastructure failures
are reported with a generic message only.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_registration_service
from src.api.models import (
    AccountResponse,
    CompleteLinkRequest,
    CreateUserRequest,
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    SendCodeRequest,
    VerifyLinkRequest,
)
from src.domain.exceptions import (
    AlreadyRegistered,
    InvalidCredentials,
    InvalidOtp,
    InvalidToken,
    NotificationFailed,
    OtpExpired,
    RegistrationError,
    StoreUnavailable,
    ValidationError,
    VerificationExpiredOrNotStarted,
)
from src.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])

# (status code, detail override); None keeps the domain message
_ERROR_RESPONSES: dict[type[RegistrationError], tuple[int, str | None]] = {
    ValidationError: (status.HTTP_400_BAD_REQUEST, None),
    VerificationExpiredOrNotStarted: (status.HTTP_400_BAD_REQUEST, None),
    OtpExpired: (status.HTTP_400_BAD_REQUEST, None),
    InvalidOtp: (status.HTTP_400_BAD_REQUEST, None),
    AlreadyRegistered: (status.HTTP_409_CONFLICT, "User already registered"),
    InvalidToken: (status.HTTP_401_UNAUTHORIZED, "Invalid or expired verification link"),
    InvalidCredentials: (status.HTTP_401_UNAUTHORIZED, "Invalid identifier or password"),
    StoreUnavailable: (status.HTTP_503_SERVICE_UNAVAILABLE, "Service temporarily unavailable"),
    NotificationFailed: (status.HTTP_502_BAD_GATEWAY, "Internal Server Error: Sending email failed"),
}

_COMMON_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or verification failed"},
    409: {"model": ErrorResponse, "description": "User already registered"},
    503: {"model": ErrorResponse, "description": "Storage unavailable"},
}


def to_http_exception(error: RegistrationError) -> HTTPException:
    """Map a domain error to the caller-visible HTTP response."""
    status_code, detail = _ERROR_RESPONSES.get(
        type(error), (status.HTTP_400_BAD_REQUEST, "Registration failed")
    )
    return HTTPException(status_code=status_code, detail=detail or str(error))


@router.post(
    "/register/send-code",
    response_model=MessageResponse,
    responses={**_COMMON_RESPONSES, 502: {"model": ErrorResponse, "description": "Email failed"}},
    summary="Send a verification code",
    description="Send a 6-digit verification code to the email address, or to the "
    "institute address derived from a roll number. The code expires in 10 minutes.",
)
def send_code(
    request_data: SendCodeRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    try:
        service.send_code(request_data.identifier)
    except RegistrationError as e:
        raise to_http_exception(e) from None
    return MessageResponse(message="Verification code sent.")


@router.post(
    "/register/create-user",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_COMMON_RESPONSES,
    summary="Create an account with a verification code",
)
def create_user(
    request_data: CreateUserRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    try:
        service.create_user(
            identifier=request_data.identifier,
            name=request_data.name,
            password=request_data.password,
            confirm_password=request_data.confirm_password,
            otp=request_data.otp,
        )
    except RegistrationError as e:
        raise to_http_exception(e) from None
    return MessageResponse(message="Registration successful!")


@router.post(
    "/verify",
    response_model=MessageResponse,
    responses={**_COMMON_RESPONSES, 502: {"model": ErrorResponse, "description": "Email failed"}},
    summary="Send a verification link",
    description="Email a signed registration link to the institute address of a "
    "roll number. The link is valid for 15 minutes.",
)
def verify(
    request_data: VerifyLinkRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    try:
        service.issue_link(request_data.roll_number)
    except RegistrationError as e:
        raise to_http_exception(e) from None
    return MessageResponse(message="Verification link sent successfully")


@router.post(
    "/verify/complete",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_COMMON_RESPONSES, 401: {"model": ErrorResponse, "description": "Invalid link"}},
    summary="Create an account from a verification link",
)
def complete_link(
    request_data: CompleteLinkRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    try:
        service.create_user_from_link(
            token=request_data.token,
            name=request_data.name,
            password=request_data.password,
            confirm_password=request_data.confirm_password,
        )
    except RegistrationError as e:
        raise to_http_exception(e) from None
    return MessageResponse(message="Registration successful!")


@router.post(
    "/login",
    response_model=AccountResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or malformed identifier"},
        401: {"model": ErrorResponse, "description": "Invalid identifier or password"},
        503: {"model": ErrorResponse, "description": "Storage unavailable"},
    },
    summary="Log in with email or roll number",
)
def login(
    request_data: LoginRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> AccountResponse:
    try:
        account = service.authenticate(request_data.identifier, request_data.password)
    except RegistrationError as e:
        raise to_http_exception(e) from None
    return AccountResponse(
        id=account.id,
        name=account.name,
        email=account.email,
        roll_number=account.roll_number,
    )
