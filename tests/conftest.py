import os

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from jobportal.api.deps import (
    get_client_store, get_delivery_log_store, get_mail_sender, get_posting_store, get_sms_sender
)
from jobportal.main import app
from jobportal.services.delivery import DeliveryError, MailSender, SmsSender
from jobportal.services.memory_service import (
    InMemoryClientStore, InMemoryDeliveryLogStore, InMemoryPostingStore
)


class RecordingMailSender(MailSender):
    """Keeps every email; recipients listed in `failing` raise DeliveryError."""

    def __init__(self):
        self.sent = []
        self.failing = set()

    def send(self, to, subject, body):
        if to in self.failing:
            raise DeliveryError(f"mailbox {to} unavailable")
        self.sent.append({"to": to, "subject": subject, "body": body})


class RecordingSmsSender(SmsSender):
    def __init__(self):
        self.sent = []
        self.failing = set()

    def send(self, to, body):
        if to in self.failing:
            raise DeliveryError(f"number {to} unreachable")
        self.sent.append({"to": to, "body": body})


@pytest.fixture
def clients():
    return InMemoryClientStore()


@pytest.fixture
def logs():
    return InMemoryDeliveryLogStore()


@pytest.fixture
def postings():
    return InMemoryPostingStore()


@pytest.fixture
def mail():
    return RecordingMailSender()


@pytest.fixture
def sms():
    return RecordingSmsSender()


@pytest.fixture
def client(clients, logs, postings, mail, sms):
    app.dependency_overrides[get_client_store] = lambda: clients
    app.dependency_overrides[get_delivery_log_store] = lambda: logs
    app.dependency_overrides[get_posting_store] = lambda: postings
    app.dependency_overrides[get_mail_sender] = lambda: mail
    app.dependency_overrides[get_sms_sender] = lambda: sms
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a company and return its clientId."""
    def _register(company_email="a@b.com", phone_no="+15551234567", **extra):
        payload = {
            "name": "Ada Lovelace",
            "phone_no": phone_no,
            "company_name": "Analytical Engines",
            "company_email": company_email,
            "employee_size": 25,
        }
        payload.update(extra)
        response = client.post("/register", json=payload)
        assert response.status_code == 200, response.text
        return response.json()["clientId"]
    return _register


@pytest.fixture
def verify(client, clients):
    """Submit the stored registration codes for a client."""
    def _verify(client_id):
        record = clients.get(client_id)
        response = client.post("/verify-otp", json={
            "clientId": client_id,
            "emailOTP": record["emailOTP"],
            "mobileOTP": record["mobileOTP"],
        })
        assert response.status_code == 200, response.text
    return _verify


@pytest.fixture
def login(client, clients):
    """Run the login OTP flow and return the session token."""
    def _login(company_email="a@b.com"):
        response = client.post("/login", json={"company_email": company_email})
        assert response.status_code == 200, response.text
        client_id = response.json()["clientId"]
        code = clients.get(client_id)["loginOTP"]
        response = client.post("/verify-login-otp", json={"clientId": client_id, "loginOTP": code})
        assert response.status_code == 200, response.text
        return response.json()["token"]
    return _login


@pytest.fixture
def verified_token(register, verify, login):
    """A verified company and a session token for it."""
    def _verified_token(company_email="a@b.com", phone_no="+15551234567"):
        client_id = register(company_email=company_email, phone_no=phone_no)
        verify(client_id)
        return client_id, login(company_email)
    return _verified_token


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def future_date(days=2):
    return (datetime.now(timezone.utc) + timedelta(days=days)).date().isoformat()
