"""
Verification Routes (authenticated)

POST /send-otp - Regenerate and resend the email + mobile codes
GET /verification-status - Is the current client verified?
"""

from fastapi import APIRouter, Depends

from jobportal.api.deps import get_verification_service
from jobportal.core.auth import get_current_client
from jobportal.services.verification_service import VerificationService
from jobportal.schemas.schemas import SendOtpResponse, VerificationStatusResponse

router = APIRouter(tags=["Verification"])


@router.post("/send-otp", response_model=SendOtpResponse)
def send_otp(
    client: dict = Depends(get_current_client),
    service: VerificationService = Depends(get_verification_service)
):
    """Send fresh verification codes; any earlier codes stop working."""
    delivery = service.resend_otp(client["id"])
    if all(status == "sent" for status in delivery.values()):
        message = "OTPs sent successfully."
    else:
        message = "OTPs regenerated, but some could not be delivered."
    return SendOtpResponse(message=message, client_id=client["id"], delivery=delivery)


@router.get("/verification-status", response_model=VerificationStatusResponse)
def verification_status(
    client: dict = Depends(get_current_client),
    service: VerificationService = Depends(get_verification_service)
):
    verified = service.verification_status(client["id"])
    return VerificationStatusResponse(
        verified=verified,
        message="Account fully verified" if verified else
        "Account not verified. Please complete email and phone verification."
    )
