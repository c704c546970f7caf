"""
Outbound delivery channels.

MailSender / SmsSender are the seams the OTP issuer talks to. The live
implementations make exactly one attempt and turn any provider error
into DeliveryError; they never retry.
"""

import smtplib
import ssl
from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.message import EmailMessage

import httpx

from jobportal.core.config import Settings


class DeliveryError(Exception):
    """A channel provider rejected or failed a delivery."""


class MailSender(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> None:
        """Deliver one email or raise DeliveryError."""


class SmsSender(ABC):
    @abstractmethod
    def send(self, to: str, body: str) -> None:
        """Deliver one text message or raise DeliveryError."""


# ============================================================
# EMAIL (SMTP)
# ============================================================

@dataclass(frozen=True)
class SmtpConfig:
    host: str
    port: int
    use_tls: bool
    user: str
    password: str
    mail_from: str
    timeout: float = 20.0

    @staticmethod
    def from_settings(settings: Settings) -> "SmtpConfig":
        return SmtpConfig(
            host=settings.smtp_host,
            port=settings.smtp_port,
            use_tls=settings.smtp_use_tls,
            user=settings.smtp_user,
            password=settings.smtp_password,
            mail_from=settings.smtp_sender,
            timeout=settings.smtp_timeout,
        )

    @property
    def complete(self) -> bool:
        return bool(self.host and self.user and self.password and self.mail_from)


class SmtpMailSender(MailSender):

    def __init__(self, config: SmtpConfig):
        self.config = config

    def send(self, to: str, subject: str, body: str) -> None:
        if not self.config.complete:
            raise DeliveryError("SMTP configuration is incomplete. Set SMTP_HOST/SMTP_USER/SMTP_PASSWORD/SMTP_FROM.")

        msg = EmailMessage()
        msg["From"] = self.config.mail_from
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(body)

        context = ssl.create_default_context()
        try:
            with smtplib.SMTP(self.config.host, self.config.port, timeout=self.config.timeout) as smtp:
                smtp.ehlo()
                if self.config.use_tls:
                    smtp.starttls(context=context)
                    smtp.ehlo()
                smtp.login(self.config.user, self.config.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(str(exc) or exc.__class__.__name__) from exc


# ============================================================
# SMS (Twilio REST API)
# ============================================================

class TwilioSmsSender(SmsSender):
    """Sends text messages through Twilio's Messages endpoint."""

    def __init__(self, account_sid: str, auth_token: str, from_number: str,
                 api_base: str = "https://api.twilio.com", timeout: float = 30.0,
                 transport: httpx.BaseTransport = None):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "TwilioSmsSender":
        return cls(
            account_sid=settings.twilio_account_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_phone_number,
            api_base=settings.twilio_api_base,
            timeout=settings.twilio_timeout,
        )

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}/2010-04-01/Accounts/{self.account_sid}/Messages.json"

    def send(self, to: str, body: str) -> None:
        if not (self.account_sid and self.auth_token and self.from_number):
            raise DeliveryError("Twilio configuration is incomplete. Set TWILIO_ACCOUNT_SID/TWILIO_AUTH_TOKEN/TWILIO_PHONE_NUMBER.")

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                r = client.post(
                    self.messages_url,
                    data={"To": to, "From": self.from_number, "Body": body},
                    auth=(self.account_sid, self.auth_token),
                )
                r.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:200]
            raise DeliveryError(f"Twilio returned {exc.response.status_code}: {detail}") from exc
        except httpx.HTTPError as exc:
            raise DeliveryError(str(exc) or exc.__class__.__name__) from exc
