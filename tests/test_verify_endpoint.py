async def always_verified(channel):
    return True


def _register_verified_channel(client, headers, channel_type, value):
    created = client.post(
        "/api/channels", json={"type": channel_type, "value": value}, headers=headers
    ).json()
    response = client.post(
        "/api/csv/verify", json={"verificationIds": [created["id"]]}, headers=headers
    )
    assert response.status_code == 200, response.text
    return created


def test_end_to_end_acme(client, register_company, login, ownership_check):
    ownership_check(always_verified)
    headers = login(register_company(name="Acme"))

    created = client.post(
        "/api/channels", json={"type": "x", "value": "@AcmeCorp"}, headers=headers
    ).json()
    assert created["status"] == "unverified"

    before = client.post("/api/verify", json={"input_value": "@acmecorp"})
    assert before.json() == {"verified": False}

    client.post("/api/csv/verify", json={"verificationIds": [created["id"]]}, headers=headers)

    response = client.post("/api/verify", json={"input_value": "@acmecorp"})
    assert response.status_code == 200
    assert response.json() == {"verified": True, "company": "Acme"}


def test_verify_is_case_insensitive(client, auth_headers, ownership_check):
    ownership_check(always_verified)
    _register_verified_channel(client, auth_headers, "email", "Support@Acme.com")

    for query in ("Support@Acme.com", "SUPPORT@ACME.COM", "support@acme.com"):
        response = client.post("/api/verify", json={"input_value": query})
        assert response.json() == {"verified": True, "company": "Acme"}


def test_verify_containment_match(client, register_company, login, ownership_check):
    ownership_check(always_verified)
    headers = login(register_company(name="CompanyX"))
    _register_verified_channel(client, headers, "website", "companyx.com")

    response = client.post("/api/verify", json={"input_value": "www.companyx.com/pricing"})
    assert response.json() == {"verified": True, "company": "CompanyX"}


def test_verify_unknown_value(client):
    response = client.post("/api/verify", json={"input_value": "@nobody_registered_this"})
    assert response.status_code == 200
    assert response.json() == {"verified": False}


def test_verify_blank_input(client):
    response = client.post("/api/verify", json={"input_value": "   "})
    assert response.status_code == 400
    assert response.json()["error"] is True


def test_verify_missing_input(client):
    response = client.post("/api/verify", json={})
    assert response.status_code == 400


def test_verify_blocks_bot_user_agents(client):
    response = client.post(
        "/api/verify",
        json={"input_value": "@acme"},
        headers={"User-Agent": "curl/8.4.0"},
    )
    assert response.status_code == 403
    assert response.json()["error"] is True
