async def always_verified(channel):
    return True


def test_analytics_counts_lookups_and_channels(client, auth_headers, ownership_check):
    ownership_check(always_verified)
    verified = client.post(
        "/api/channels", json={"type": "x", "value": "@acme_analytics"}, headers=auth_headers
    ).json()
    client.post("/api/channels", json={"type": "x", "value": "@acme_pending"}, headers=auth_headers)
    client.post("/api/csv/verify", json={"verificationIds": [verified["id"]]}, headers=auth_headers)

    client.post("/api/verify", json={"input_value": "@acme_analytics"})
    client.post("/api/verify", json={"input_value": "@ACME_ANALYTICS"})
    client.post("/api/verify", json={"input_value": "@someone_else"})

    response = client.get("/api/analytics", headers=auth_headers)

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["total_verifications"] == 2
    assert data["verified_count"] == 1
    assert data["channel_count"] == 2
    assert data["stats"]["week"] == 2
    assert data["stats"]["month"] == 2


def test_analytics_for_new_company(client, auth_headers):
    response = client.get("/api/analytics", headers=auth_headers)
    assert response.json() == {
        "total_verifications": 0,
        "verified_count": 0,
        "channel_count": 0,
        "stats": {"today": 0, "week": 0, "month": 0},
    }


def test_analytics_requires_auth(client):
    assert client.get("/api/analytics").status_code == 401
