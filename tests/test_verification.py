from conftest import auth


def test_verify_otp_with_both_codes_verifies_and_clears(client, clients, register):
    client_id = register()
    record = clients.get(client_id)

    response = client.post("/verify-otp", json={
        "clientId": client_id,
        "emailOTP": record["emailOTP"],
        "mobileOTP": record["mobileOTP"],
    })

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "OTPs verified successfully.",
        "verified": True,
        "redirectUrl": "/dashboard",
    }
    record = clients.get(client_id)
    assert record["verified"] is True
    assert "emailOTP" not in record
    assert "mobileOTP" not in record


def test_one_wrong_code_changes_nothing(client, clients, register):
    client_id = register()
    before = clients.get(client_id)
    wrong_mobile = "000000" if before["mobileOTP"] != "000000" else "111111"

    response = client.post("/verify-otp", json={
        "clientId": client_id,
        "emailOTP": before["emailOTP"],
        "mobileOTP": wrong_mobile,
    })

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid OTPs."}
    after = clients.get(client_id)
    assert after["verified"] is False
    assert after["emailOTP"] == before["emailOTP"]
    assert after["mobileOTP"] == before["mobileOTP"]


def test_codes_are_single_use(client, clients, register):
    client_id = register()
    record = clients.get(client_id)
    payload = {"clientId": client_id, "emailOTP": record["emailOTP"], "mobileOTP": record["mobileOTP"]}

    assert client.post("/verify-otp", json=payload).status_code == 200
    response = client.post("/verify-otp", json=payload)

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert clients.get(client_id)["verified"] is True


def test_empty_codes_never_match(client, register):
    client_id = register()

    response = client.post("/verify-otp", json={"clientId": client_id, "emailOTP": "", "mobileOTP": ""})

    assert response.status_code == 400


def test_verify_unknown_client_is_404(client):
    response = client.post("/verify-otp", json={
        "clientId": "64b7f0c2a1b2c3d4e5f60718",
        "emailOTP": "123456",
        "mobileOTP": "654321",
    })

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Client not found."}


def test_verify_malformed_client_id_is_404(client):
    response = client.post("/verify-otp", json={"clientId": "nope", "emailOTP": "1", "mobileOTP": "2"})

    assert response.status_code == 404


def test_verification_status_follows_the_flow(client, register, verify, login):
    client_id = register()
    token = login()

    response = client.get("/verification-status", headers=auth(token))
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "verified": False,
        "message": "Account not verified. Please complete email and phone verification.",
    }

    verify(client_id)

    response = client.get("/verification-status", headers=auth(token))
    assert response.json()["verified"] is True
    assert response.json()["message"] == "Account fully verified"


def test_send_otp_replaces_pending_codes(client, clients, register, login, mail, sms):
    client_id = register()
    old = clients.get(client_id)
    token = login()
    mail.sent.clear()
    sms.sent.clear()

    response = client.post("/send-otp", headers=auth(token))

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["clientId"] == client_id
    assert body["delivery"] == {"email": "sent", "sms": "sent"}

    new = clients.get(client_id)
    assert mail.sent[0]["body"].endswith(new["emailOTP"])
    assert sms.sent[0]["body"].endswith(new["mobileOTP"])

    if (old["emailOTP"], old["mobileOTP"]) != (new["emailOTP"], new["mobileOTP"]):
        stale = client.post("/verify-otp", json={
            "clientId": client_id, "emailOTP": old["emailOTP"], "mobileOTP": old["mobileOTP"],
        })
        assert stale.status_code == 400

    fresh = client.post("/verify-otp", json={
        "clientId": client_id, "emailOTP": new["emailOTP"], "mobileOTP": new["mobileOTP"],
    })
    assert fresh.status_code == 200


def test_send_otp_delivery_failure_is_reported_not_fatal(client, clients, register, login, sms, logs):
    client_id = register()
    token = login()
    sms.failing.add("+15551234567")

    response = client.post("/send-otp", headers=auth(token))

    assert response.status_code == 200
    assert response.json()["delivery"] == {"email": "sent", "sms": "failed"}
    assert response.json()["message"] == "OTPs regenerated, but some could not be delivered."
    assert "mobileOTP" in clients.get(client_id)
    assert len(logs.query(channel="sms", status="failed")) == 1


def test_send_otp_refuses_verified_client(client, verified_token):
    _, token = verified_token()

    response = client.post("/send-otp", headers=auth(token))

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Account already verified."}


def test_send_otp_requires_token(client):
    response = client.post("/send-otp")

    assert response.status_code == 401
    assert response.json()["success"] is False
