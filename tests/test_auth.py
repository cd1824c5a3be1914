import uuid
from unittest.mock import patch

from app.features.auth.utils.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

PASSWORD = "TestPassword123"


def _email():
    return f"authtest-{uuid.uuid4().hex[:8]}@example.com"


def test_password_hash_round_trip():
    hashed = hash_password(PASSWORD)
    assert hashed != PASSWORD
    assert verify_password(PASSWORD, hashed)
    assert not verify_password("WrongPassword123", hashed)


def test_verify_password_rejects_malformed_hash():
    assert verify_password(PASSWORD, "not-a-bcrypt-hash") is False


def test_access_token_carries_subject():
    token = create_access_token({"sub": "company-1"})
    assert decode_access_token(token)["sub"] == "company-1"


def test_tampered_access_token_is_rejected():
    token = create_access_token({"sub": "company-1"})
    try:
        decode_access_token(token + "x")
    except ValueError as e:
        assert "invalid" in str(e).lower()
    else:
        raise AssertionError("tampered token was accepted")


def test_register_success_sends_verification_email(client):
    email = _email()
    with patch("app.features.auth.routes.auth.send_verification_email") as mock_send_email:
        response = client.post(
            "/api/auth/register",
            json={"name": "Acme", "email": email, "password": PASSWORD},
        )

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["success"] is True
    assert "check your email" in data["message"].lower()

    mock_send_email.assert_called_once()
    assert mock_send_email.call_args.kwargs["to_email"] == email
    assert mock_send_email.call_args.kwargs["company_name"] == "Acme"


def test_register_duplicate_email(client, register_company):
    account = register_company()
    with patch("app.features.auth.routes.auth.send_verification_email"):
        response = client.post(
            "/api/auth/register",
            json={"name": "Other", "email": account["email"], "password": PASSWORD},
        )

    assert response.status_code == 400
    assert response.json() == {"error": True, "message": "Email already in use"}


def test_register_weak_password(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Acme", "email": _email(), "password": "short"},
    )
    assert response.status_code == 400
    payload = response.json()
    assert payload["error"] is True
    assert payload["message"] == "Validation failed"
    assert payload["details"]


def test_register_missing_fields(client):
    response = client.post("/api/auth/register", json={"email": _email()})
    assert response.status_code == 400
    assert response.json()["error"] is True


def test_verify_email_redirects_to_login(client, register_company):
    account = register_company(verify=False)
    response = client.get(
        "/api/auth/verify-email",
        params={"token": account["verification_token"]},
        follow_redirects=False,
    )
    assert response.status_code == 302
    assert response.headers["location"].endswith("/login?verified=true")


def test_verify_email_token_is_single_use(client, register_company):
    account = register_company()
    response = client.get(
        "/api/auth/verify-email",
        params={"token": account["verification_token"]},
        follow_redirects=False,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or expired verification token"


def test_verify_email_requires_token(client):
    response = client.get("/api/auth/verify-email", follow_redirects=False)
    assert response.status_code == 400
    assert response.json()["error"] is True


def test_login_success(client, register_company):
    account = register_company(name="Acme")
    response = client.post(
        "/api/auth/login",
        json={"email": account["email"], "password": account["password"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert decode_access_token(data["token"])["email"] == account["email"]
    assert data["company"]["name"] == "Acme"
    assert data["company"]["email"] == account["email"]
    assert data["company"]["subscriptionStatus"] == "TRIAL"


def test_login_unverified_email(client, register_company):
    account = register_company(verify=False)
    response = client.post(
        "/api/auth/login",
        json={"email": account["email"], "password": account["password"]},
    )

    assert response.status_code == 401
    payload = response.json()
    assert payload["error"] is True
    assert payload["needsVerification"] is True


def test_login_invalid_password(client, register_company):
    account = register_company()
    response = client.post(
        "/api/auth/login",
        json={"email": account["email"], "password": "WrongPassword123"},
    )

    assert response.status_code == 401
    assert response.json() == {"error": True, "message": "Invalid credentials"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_login_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": _email(), "password": PASSWORD})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_protected_endpoint_requires_token(client):
    response = client.get("/api/channels")
    assert response.status_code == 401
    assert response.json()["error"] is True


def test_protected_endpoint_rejects_garbage_token(client):
    response = client.get("/api/channels", headers={"Authorization": "Bearer nonsense"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_forgot_password_same_answer_for_unknown_email(client, register_company):
    account = register_company()

    with patch("app.features.auth.routes.auth.send_password_reset_email") as mock_send_email:
        known = client.post("/api/auth/forgot-password", json={"email": account["email"]})
        unknown = client.post("/api/auth/forgot-password", json={"email": _email()})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    mock_send_email.assert_called_once()
    assert mock_send_email.call_args.args[0] == account["email"]


def test_reset_password_flow(client, register_company, login):
    account = register_company()

    with patch("app.features.auth.routes.auth.send_password_reset_email") as mock_send_email:
        client.post("/api/auth/forgot-password", json={"email": account["email"]})
    reset_token = mock_send_email.call_args.args[1]

    new_password = "BrandNewPass456"
    response = client.post(
        "/api/auth/reset-password",
        json={"token": reset_token, "password": new_password},
    )
    assert response.status_code == 200
    assert response.json()["success"] is True

    old_login = client.post(
        "/api/auth/login",
        json={"email": account["email"], "password": account["password"]},
    )
    assert old_login.status_code == 401

    login({**account, "password": new_password})

    reused = client.post(
        "/api/auth/reset-password",
        json={"token": reset_token, "password": "AnotherPass789"},
    )
    assert reused.status_code == 400
    assert reused.json()["message"] == "Invalid or expired reset token"


def test_reset_password_invalid_token(client):
    response = client.post(
        "/api/auth/reset-password",
        json={"token": "does-not-exist", "password": "BrandNewPass456"},
    )
    assert response.status_code == 400
    assert response.json()["error"] is True
