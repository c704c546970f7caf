"""
OTP Service - code generation and multi-channel dispatch.

Every dispatch attempt, on either channel and whatever the outcome,
leaves exactly one entry in the delivery log. Failures are reported back
to the caller as a DeliveryResult; nothing here retries.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from jobportal.schemas.schemas import DeliveryCategory, DeliveryChannel, DeliveryStatus
from jobportal.services.delivery import DeliveryError, MailSender, SmsSender
from jobportal.services.stores import DeliveryLogStore

logger = logging.getLogger(__name__)

OTP_MIN = 100000
OTP_MAX = 999999

EMAIL_SUBJECTS = {
    DeliveryCategory.verification: "Email Verification OTP",
    DeliveryCategory.login: "Login OTP",
}
EMAIL_TEXTS = {
    DeliveryCategory.verification: "Your email verification OTP is: {code}",
    DeliveryCategory.login: "Your login OTP is: {code}",
}
SMS_TEXTS = {
    DeliveryCategory.verification: "Your mobile verification OTP is: {code}",
    DeliveryCategory.login: "Your login OTP is: {code}",
}
INVITATION_SUBJECT = "New Job Opportunity"
INVITATION_TEXT = (
    "You have been invited to apply for the position of {title}. "
    "Please check your dashboard for more details."
)


def generate_otp() -> str:
    """Six-digit code, uniform over [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


@dataclass
class DeliveryResult:
    channel: DeliveryChannel
    status: DeliveryStatus
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == DeliveryStatus.sent


class OtpIssuer:
    """
    Sends codes and invitations, logging each attempt.

    Args:
        mail: email channel
        sms: SMS channel
        log: delivery log the attempts are appended to
    """

    def __init__(self, mail: MailSender, sms: SmsSender, log: DeliveryLogStore):
        self.mail = mail
        self.sms = sms
        self.log = log

    def issue(self) -> str:
        return generate_otp()

    def dispatch_email(self, recipient: str, code: str, purpose: DeliveryCategory,
                       client_id: Optional[str] = None) -> DeliveryResult:
        return self._send_email(
            recipient,
            EMAIL_SUBJECTS[purpose],
            EMAIL_TEXTS[purpose].format(code=code),
            purpose,
            client_id,
        )

    def dispatch_sms(self, recipient: str, code: str, purpose: DeliveryCategory,
                     client_id: Optional[str] = None) -> DeliveryResult:
        body = SMS_TEXTS[purpose].format(code=code)
        try:
            self.sms.send(recipient, body)
            result = DeliveryResult(DeliveryChannel.sms, DeliveryStatus.sent)
        except DeliveryError as exc:
            result = DeliveryResult(DeliveryChannel.sms, DeliveryStatus.failed, str(exc))

        self._record(recipient, None, body, purpose, client_id, result)
        return result

    def send_invitation(self, recipient: str, job_title: str,
                        client_id: Optional[str] = None) -> DeliveryResult:
        return self._send_email(
            recipient,
            INVITATION_SUBJECT,
            INVITATION_TEXT.format(title=job_title),
            DeliveryCategory.job_invitation,
            client_id,
        )

    def _send_email(self, recipient: str, subject: str, body: str,
                    category: DeliveryCategory, client_id: Optional[str]) -> DeliveryResult:
        try:
            self.mail.send(recipient, subject, body)
            result = DeliveryResult(DeliveryChannel.email, DeliveryStatus.sent)
        except DeliveryError as exc:
            result = DeliveryResult(DeliveryChannel.email, DeliveryStatus.failed, str(exc))

        self._record(recipient, subject, body, category, client_id, result)
        return result

    def _record(self, recipient: str, subject: Optional[str], body: str,
                category: DeliveryCategory, client_id: Optional[str], result: DeliveryResult) -> None:
        entry = {
            "recipient": recipient,
            "subject": subject,
            "body": body,
            "status": result.status.value,
            "sentAt": datetime.now(timezone.utc),
            "clientId": client_id,
            "type": category.value,
            "channel": result.channel.value,
        }
        if result.error:
            entry["error"] = result.error
        self.log.append(entry)

        if result.ok:
            logger.info("%s %s delivered to %s", category.value, result.channel.value, recipient)
        else:
            logger.warning("%s %s to %s failed: %s", category.value, result.channel.value, recipient, result.error)
