"""
Verification Service - registration, OTP verification and OTP login.

Client lifecycle:

    unregistered --register--> pending_verification --verify_otp--> verified

pending_verification means emailOTP and mobileOTP are set and verified is
false. verified is terminal. The login OTP is a separate challenge that
any registered client can take, verified or not.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from jobportal.core.auth import issue_session_token
from jobportal.core.errors import DeliveryFailure, InvalidCode, NotFound, ValidationFailed
from jobportal.schemas.schemas import DeliveryCategory, RegisterRequest
from jobportal.services.otp_service import OtpIssuer
from jobportal.services.stores import ClientStore

logger = logging.getLogger(__name__)


class VerificationService:

    def __init__(self, clients: ClientStore, issuer: OtpIssuer):
        self.clients = clients
        self.issuer = issuer

    def get_client(self, client_id: str) -> dict:
        client = self.clients.get(client_id)
        if client is None:
            raise NotFound()
        return client

    # ------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------

    def register(self, data: RegisterRequest) -> str:
        """
        Create an unverified client and send both verification codes.

        If either code can't be delivered the new record is deleted again
        and DeliveryFailure is raised, so the company can simply register
        again instead of being locked out by its own half-created record.
        """
        email_otp = self.issuer.issue()
        mobile_otp = self.issuer.issue()

        client_id = self.clients.insert_if_absent({
            "name": data.name,
            "phone_no": data.phone_no,
            "company_name": data.company_name,
            "company_email": data.company_email,
            "employee_size": data.employee_size,
            "verified": False,
            "emailOTP": email_otp,
            "mobileOTP": mobile_otp,
            "created_at": datetime.now(timezone.utc),
        })
        logger.info("Registered client %s (%s)", client_id, data.company_email)

        try:
            result = self.issuer.dispatch_email(data.company_email, email_otp, DeliveryCategory.verification, client_id)
            if result.ok:
                result = self.issuer.dispatch_sms(data.phone_no, mobile_otp, DeliveryCategory.verification, client_id)
        except Exception as exc:
            self._rollback(client_id)
            logger.exception("Dispatch for client %s raised", client_id)
            raise DeliveryFailure(f"Error registering client: {exc}") from exc

        if not result.ok:
            self._rollback(client_id)
            raise DeliveryFailure(f"Error registering client: could not send {result.channel.value} OTP ({result.error})")

        return client_id

    def _rollback(self, client_id: str) -> None:
        self.clients.delete(client_id)
        logger.warning("Rolled back registration of client %s after delivery failure", client_id)

    def verify_otp(self, client_id: str, email_otp: str, mobile_otp: str) -> None:
        """Both codes must match; on success they are cleared and the client is verified."""
        if email_otp and mobile_otp and self.clients.consume_codes(
            client_id,
            {"emailOTP": email_otp, "mobileOTP": mobile_otp},
            {"verified": True, "verified_at": datetime.now(timezone.utc)},
        ):
            logger.info("Client %s verified", client_id)
            return

        self.get_client(client_id)
        raise InvalidCode("Invalid OTPs.")

    def resend_otp(self, client_id: str) -> Dict[str, str]:
        """
        Replace both pending codes and send them again.
        Delivery failures are reported, not raised.
        """
        client = self.get_client(client_id)
        if client.get("verified"):
            raise ValidationFailed("Account already verified.")

        email_otp = self.issuer.issue()
        mobile_otp = self.issuer.issue()
        self.clients.set_fields(client_id, {"emailOTP": email_otp, "mobileOTP": mobile_otp})

        email = self.issuer.dispatch_email(client["company_email"], email_otp, DeliveryCategory.verification, client_id)
        sms = self.issuer.dispatch_sms(client["phone_no"], mobile_otp, DeliveryCategory.verification, client_id)
        return {"email": email.status.value, "sms": sms.status.value}

    def verification_status(self, client_id: str) -> bool:
        return bool(self.get_client(client_id).get("verified"))

    # ------------------------------------------------------------
    # Login
    # ------------------------------------------------------------

    def request_login(self, company_email: Optional[str] = None, phone_no: Optional[str] = None):
        """
        Set a fresh login code and send it: by email when the caller gave
        an email address, otherwise by SMS.

        Returns (client_id, delivery) where delivery maps channel -> status.
        """
        if not company_email and not phone_no:
            raise ValidationFailed("Provide company_email or phone_no.")

        client = self.clients.find_by_contact(company_email=company_email, phone_no=phone_no)
        if client is None:
            raise NotFound()

        client_id = client["_id"]
        login_otp = self.issuer.issue()
        self.clients.set_fields(client_id, {"loginOTP": login_otp})

        if company_email:
            result = self.issuer.dispatch_email(client["company_email"], login_otp, DeliveryCategory.login, client_id)
        else:
            result = self.issuer.dispatch_sms(client["phone_no"], login_otp, DeliveryCategory.login, client_id)

        return client_id, {result.channel.value: result.status.value}

    def verify_login(self, client_id: str, login_otp: str):
        """Consume the login code and mint a session token. Returns (token, client)."""
        if not login_otp or not self.clients.consume_codes(client_id, {"loginOTP": login_otp}):
            self.get_client(client_id)
            raise InvalidCode("Invalid OTP.")

        client = self.get_client(client_id)
        token = issue_session_token(client)
        logger.info("Session issued for client %s", client_id)
        return token, client
