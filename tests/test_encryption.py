import pytest
from cryptography.fernet import Fernet

from app.platform.config import settings
from app.platform.exceptions import DecryptError
from app.platform.utils.encryption import decrypt_value, encrypt_value


def test_encrypt_decrypt_round_trip():
    token = encrypt_value("Jane Doe")
    assert token != "Jane Doe"
    assert decrypt_value(token) == "Jane Doe"


def test_empty_values_pass_through():
    assert encrypt_value(None) is None
    assert encrypt_value("") == ""
    assert decrypt_value(None) is None


def test_tampered_token_raises():
    token = encrypt_value("Jane Doe")
    with pytest.raises(DecryptError):
        decrypt_value(token[:-4] + "AAAA")


def test_plaintext_in_encrypted_column_raises():
    with pytest.raises(DecryptError):
        decrypt_value("Jane Doe")


def test_wrong_key_raises(monkeypatch):
    token = encrypt_value("Jane Doe")
    monkeypatch.setattr(settings, "ENCRYPTION_KEY", Fernet.generate_key().decode())

    with pytest.raises(DecryptError):
        decrypt_value(token)


def test_without_key_values_are_stored_as_is(monkeypatch):
    monkeypatch.setattr(settings, "ENCRYPTION_KEY", None)
    assert encrypt_value("Jane Doe") == "Jane Doe"
    assert decrypt_value("Jane Doe") == "Jane Doe"
