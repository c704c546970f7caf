"""
Authentication Routes

POST /register - Register a company, send email + SMS codes
POST /verify-otp - Verify both registration codes
POST /login - Send a login code by email or SMS
POST /verify-login-otp - Exchange the login code for a session token
"""

from fastapi import APIRouter, Depends

from jobportal.api.deps import get_verification_service
from jobportal.services.verification_service import VerificationService
from jobportal.schemas.schemas import (
    RegisterRequest, RegisterResponse, VerifyOtpRequest, VerifyOtpResponse,
    LoginRequest, LoginResponse, VerifyLoginRequest, TokenResponse, SessionUser
)

router = APIRouter(tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse)
def register(request: RegisterRequest, service: VerificationService = Depends(get_verification_service)):
    """
    Register a new company.

    The company receives an email code and an SMS code; submit both to
    /verify-otp with the returned clientId.
    """
    client_id = service.register(request)
    return RegisterResponse(message="Client registered successfully. OTPs sent.", client_id=client_id)


@router.post("/verify-otp", response_model=VerifyOtpResponse)
def verify_otp(request: VerifyOtpRequest, service: VerificationService = Depends(get_verification_service)):
    """Verify the email and mobile codes. Both must match."""
    service.verify_otp(request.client_id, request.email_otp, request.mobile_otp)
    return VerifyOtpResponse(message="OTPs verified successfully.")


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, service: VerificationService = Depends(get_verification_service)):
    """
    Start a passwordless login.

    With company_email the code goes out by email, with only phone_no by SMS.
    """
    client_id, delivery = service.request_login(request.company_email, request.phone_no)
    return LoginResponse(message="OTP sent for login.", client_id=client_id, delivery=delivery)


@router.post("/verify-login-otp", response_model=TokenResponse)
def verify_login_otp(request: VerifyLoginRequest, service: VerificationService = Depends(get_verification_service)):
    """
    Exchange the login code for a session token.

    Include token in requests: Authorization: Bearer <token>
    """
    token, client = service.verify_login(request.client_id, request.login_otp)
    return TokenResponse(
        message="OTP verified successfully.",
        token=token,
        user=SessionUser(id=client["_id"], name=client.get("name"), email=client.get("company_email")),
    )
