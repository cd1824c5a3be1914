"""
Encryption utilities for PII stored alongside channels (employee names, etc.).
Uses Fernet symmetric encryption with the configured ENCRYPTION_KEY.

Decryption failures raise DecryptError instead of handing the ciphertext back
to the caller.
"""
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from app.platform.config import settings
from app.platform.exceptions import DecryptError
from app.platform.logger import get_logger

logger = get_logger(__name__)


def _get_fernet() -> Optional[Fernet]:
    """Get a Fernet cipher using the configured encryption key."""
    key = settings.ENCRYPTION_KEY
    if not key:
        return None
    return Fernet(key.encode() if isinstance(key, str) else key)


def encrypt_value(plaintext: Optional[str]) -> Optional[str]:
    """
    Encrypt a string value. Returns the Fernet token as a string.
    Values are stored as-is when no encryption key is configured.
    """
    if not plaintext:
        return plaintext

    fernet = _get_fernet()
    if fernet is None:
        logger.warning("ENCRYPTION_KEY not configured - storing value unencrypted")
        return plaintext

    return fernet.encrypt(plaintext.encode()).decode()


def decrypt_value(token: Optional[str]) -> Optional[str]:
    """Decrypt a Fernet token. Raises DecryptError on a bad key or tampered token."""
    if not token:
        return token

    fernet = _get_fernet()
    if fernet is None:
        return token

    try:
        return fernet.decrypt(token.encode()).decode()
    except (InvalidToken, UnicodeDecodeError) as e:
        logger.error(f"Decryption failed: {type(e).__name__}")
        raise DecryptError("Stored value could not be decrypted") from e


class EncryptedString(TypeDecorator):
    """String column that is transparently encrypted at rest."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return encrypt_value(value)

    def process_result_value(self, value, dialect):
        return decrypt_value(value)
