async def always_verified(channel):
    return True


async def never_verified(channel):
    return False


def _upload(client, headers, rows):
    return client.post("/api/csv/upload", json={"channels": rows}, headers=headers)


def test_upload_creates_unverified_channels(client, auth_headers):
    response = _upload(
        client,
        auth_headers,
        [
            {"channel": "@acme", "type": "x"},
            {"channel": "acme.com", "type": "website", "description": "Homepage"},
        ],
    )

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["message"] == "CSV data uploaded successfully"
    assert data["count"] == 2
    assert [v["value"] for v in data["verifications"]] == ["@acme", "acme.com"]
    for verification in data["verifications"]:
        assert verification["status"] == "unverified"
        assert verification["metadata"]["source"] == "csv_upload"


def test_upload_with_empty_channel_rejects_whole_batch(client, auth_headers):
    response = _upload(
        client,
        auth_headers,
        [{"channel": "@acme", "type": "x"}, {"channel": "", "type": "x"}],
    )

    assert response.status_code == 400
    assert response.json()["error"] is True

    listed = client.get("/api/channels", headers=auth_headers).json()
    assert listed["channels"] == []


def test_upload_missing_field_is_validation_error(client, auth_headers):
    response = _upload(client, auth_headers, [{"channel": "@acme"}])
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


def test_upload_requires_auth(client):
    response = client.post("/api/csv/upload", json={"channels": []})
    assert response.status_code == 401


def test_verify_marks_every_channel_verified(client, auth_headers, ownership_check):
    ownership_check(always_verified)
    uploaded = _upload(
        client,
        auth_headers,
        [{"channel": f"@acme_{i}", "type": "x"} for i in range(3)],
    ).json()
    ids = [v["id"] for v in uploaded["verifications"]]

    response = client.post("/api/csv/verify", json={"verificationIds": ids}, headers=auth_headers)

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["message"] == "Verification process completed"
    assert [r["id"] for r in data["results"]] == ids
    for result in data["results"]:
        assert result["status"] == "verified"
        assert result["verifiedAt"] is not None


def test_verify_failures_stay_failed(client, auth_headers, ownership_check):
    ownership_check(never_verified)
    uploaded = _upload(client, auth_headers, [{"channel": "@acme", "type": "x"}]).json()
    channel_id = uploaded["verifications"][0]["id"]

    first = client.post("/api/csv/verify", json={"verificationIds": [channel_id]}, headers=auth_headers)
    assert first.json()["results"][0]["status"] == "failed"
    assert first.json()["results"][0]["verifiedAt"] is None

    # a settled channel is no longer eligible
    ownership_check(always_verified)
    second = client.post("/api/csv/verify", json={"verificationIds": [channel_id]}, headers=auth_headers)
    assert second.status_code == 404
    assert second.json() == {"error": True, "message": "No unverified records found"}


def test_verify_unknown_ids(client, auth_headers, ownership_check):
    ownership_check(always_verified)
    response = client.post(
        "/api/csv/verify", json={"verificationIds": ["missing-id"]}, headers=auth_headers
    )
    assert response.status_code == 404


def test_verify_requires_ids(client, auth_headers):
    response = client.post("/api/csv/verify", json={}, headers=auth_headers)
    assert response.status_code == 400


def test_verify_requires_auth(client):
    response = client.post("/api/csv/verify", json={"verificationIds": ["x"]})
    assert response.status_code == 401
