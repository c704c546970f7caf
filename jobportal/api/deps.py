"""
Dependency wiring.

Stores and senders are built once from settings. Tests replace them via
app.dependency_overrides, e.g.:

    app.dependency_overrides[get_client_store] = lambda: InMemoryClientStore()
"""

import threading
from functools import wraps
from fastapi import Depends

from jobportal.core.config import Settings, get_settings
from jobportal.services.delivery import MailSender, SmsSender, SmtpConfig, SmtpMailSender, TwilioSmsSender
from jobportal.services.memory_service import InMemoryClientStore, InMemoryDeliveryLogStore, InMemoryPostingStore
from jobportal.services.mongo_service import MongoClientStore, MongoDeliveryLogStore, MongoPostingStore
from jobportal.services.otp_service import OtpIssuer
from jobportal.services.posting_service import PostingService
from jobportal.services.stores import ClientStore, DeliveryLogStore, PostingStore
from jobportal.services.verification_service import VerificationService


def build_once(factory):
    """Call factory on first use only; concurrent first callers share one instance."""
    instance = []
    lock = threading.Lock()

    @wraps(factory)
    def get():
        if not instance:
            with lock:
                if not instance:
                    instance.append(factory())
        return instance[0]

    get.cache_clear = instance.clear
    return get


def _use_memory() -> bool:
    return get_settings().storage_backend == "memory"


@build_once
def get_client_store() -> ClientStore:
    return InMemoryClientStore() if _use_memory() else MongoClientStore()


@build_once
def get_delivery_log_store() -> DeliveryLogStore:
    return InMemoryDeliveryLogStore() if _use_memory() else MongoDeliveryLogStore()


@build_once
def get_posting_store() -> PostingStore:
    return InMemoryPostingStore() if _use_memory() else MongoPostingStore()


@build_once
def get_mail_sender() -> MailSender:
    return SmtpMailSender(SmtpConfig.from_settings(get_settings()))


@build_once
def get_sms_sender() -> SmsSender:
    return TwilioSmsSender.from_settings(get_settings())


def get_otp_issuer(
    mail: MailSender = Depends(get_mail_sender),
    sms: SmsSender = Depends(get_sms_sender),
    log: DeliveryLogStore = Depends(get_delivery_log_store),
) -> OtpIssuer:
    return OtpIssuer(mail, sms, log)


def get_verification_service(
    clients: ClientStore = Depends(get_client_store),
    issuer: OtpIssuer = Depends(get_otp_issuer),
) -> VerificationService:
    return VerificationService(clients, issuer)


def get_posting_service(
    postings: PostingStore = Depends(get_posting_store),
    clients: ClientStore = Depends(get_client_store),
    issuer: OtpIssuer = Depends(get_otp_issuer),
    settings: Settings = Depends(get_settings),
) -> PostingService:
    return PostingService(postings, clients, issuer, tenant_scoped=settings.tenant_scoped_listings)
