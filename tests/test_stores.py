from datetime import datetime, timedelta, timezone

import httpx
import pytest

from jobportal.core.errors import DuplicateIdentity
from jobportal.services.delivery import DeliveryError, SmtpConfig, SmtpMailSender, TwilioSmsSender
from jobportal.services.memory_service import InMemoryClientStore, InMemoryPostingStore


def new_client(store, email="a@b.com", phone="+1555"):
    return store.insert_if_absent({
        "company_email": email, "phone_no": phone, "verified": False,
        "emailOTP": "111111", "mobileOTP": "222222",
    })


def test_insert_if_absent_rejects_either_unique_field():
    store = InMemoryClientStore()
    new_client(store)

    with pytest.raises(DuplicateIdentity):
        new_client(store, email="a@b.com", phone="+1999")
    with pytest.raises(DuplicateIdentity):
        new_client(store, email="z@b.com", phone="+1555")


def test_consume_codes_is_all_or_nothing():
    store = InMemoryClientStore()
    client_id = new_client(store)

    assert not store.consume_codes(client_id, {"emailOTP": "111111", "mobileOTP": "999999"}, {"verified": True})
    assert store.get(client_id)["emailOTP"] == "111111"

    assert store.consume_codes(client_id, {"emailOTP": "111111", "mobileOTP": "222222"}, {"verified": True})
    record = store.get(client_id)
    assert record["verified"] is True
    assert "emailOTP" not in record and "mobileOTP" not in record

    assert not store.consume_codes(client_id, {"emailOTP": "111111", "mobileOTP": "222222"})


def test_returned_documents_are_copies():
    store = InMemoryClientStore()
    client_id = new_client(store)

    store.get(client_id)["verified"] = True

    assert store.get(client_id)["verified"] is False


def test_find_by_contact_matches_either_identifier():
    store = InMemoryClientStore()
    client_id = new_client(store)

    assert store.find_by_contact(company_email="a@b.com")["_id"] == client_id
    assert store.find_by_contact(phone_no="+1555")["_id"] == client_id
    assert store.find_by_contact(company_email="x@b.com", phone_no="+1555")["_id"] == client_id
    assert store.find_by_contact() is None


def test_postings_sort_newest_first_with_ties_by_insertion():
    store = InMemoryPostingStore()
    now = datetime.now(timezone.utc)
    store.insert({"clientId": "c1", "jobTitle": "old", "createdAt": now - timedelta(hours=1)})
    store.insert({"clientId": "c1", "jobTitle": "tie-1", "createdAt": now})
    store.insert({"clientId": "c2", "jobTitle": "tie-2", "createdAt": now})

    assert [p["jobTitle"] for p in store.list()] == ["tie-2", "tie-1", "old"]
    assert [p["jobTitle"] for p in store.list("c1")] == ["tie-1", "old"]


def test_smtp_sender_with_incomplete_config_raises():
    sender = SmtpMailSender(SmtpConfig(host="smtp.example.com", port=587, use_tls=True,
                                       user="", password="", mail_from=""))

    with pytest.raises(DeliveryError):
        sender.send("a@b.com", "Subject", "Body")


def test_twilio_sender_posts_message():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = request.content.decode()
        seen["auth"] = request.headers["authorization"]
        return httpx.Response(201, json={"sid": "SM123"})

    sender = TwilioSmsSender("AC123", "secret", "+15550000000", transport=httpx.MockTransport(handler))
    sender.send("+15551234567", "Your login OTP is: 123456")

    assert seen["url"] == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
    assert "To=%2B15551234567" in seen["body"]
    assert "From=%2B15550000000" in seen["body"]
    assert seen["auth"].startswith("Basic ")


def test_twilio_error_becomes_delivery_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(400, json={"message": "invalid To"}))
    sender = TwilioSmsSender("AC123", "secret", "+15550000000", transport=transport)

    with pytest.raises(DeliveryError, match="Twilio returned 400"):
        sender.send("bogus", "hi")


def test_twilio_without_credentials_raises():
    with pytest.raises(DeliveryError):
        TwilioSmsSender("", "", "").send("+1555", "hi")
