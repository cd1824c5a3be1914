from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Verify.me"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = True
    API_PREFIX: str = "/api"
    FRONTEND_URL: str = "http://localhost:3000"
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # ── Database ────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./verify_me.db"

    # ── Email Configuration ─────────────────────
    MAIL_HOST: str = "smtp.mailtrap.io"
    MAIL_PORT: int = 2525
    MAIL_USERNAME: str = "your-mailtrap-user"
    MAIL_PASSWORD: str = "your-mailtrap-password"
    MAIL_ENCRYPTION: str = "tls"
    MAIL_FROM_ADDRESS: str = "noreply@verify.me"
    MAIL_FROM_NAME: str = "Verify.me"

    EMAIL_RELAY_URL: str = ""
    EMAIL_RELAY_API_KEY: str = ""
    EMAIL_RELAY_TIMEOUT: int = 30

    # ── JWT / Auth ──────────────────────────────
    JWT_SECRET_KEY: str = "verify-me-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30
    VERIFICATION_TOKEN_EXPIRE_HOURS: int = 24
    RESET_TOKEN_EXPIRE_HOURS: int = 24

    # ── Encryption ──────────────────────────────
    # Fernet key (urlsafe base64, 32 bytes). Unset means PII columns are stored as-is.
    ENCRYPTION_KEY: Optional[str] = None

    # ── Channel verification ────────────────────
    VERIFY_MATCH_MODE: Literal["lenient", "exact"] = "lenient"
    VERIFICATION_SUCCESS_RATE: float = 0.8
    VERIFICATION_SIMULATED_DELAY_SECONDS: float = 1.0
    VERIFICATION_TIMEOUT_SECONDS: float = 10.0

    # ── Rate limiting ───────────────────────────
    # path -> (max requests, window seconds); "*" applies to every other API path
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMITS: Dict[str, Tuple[int, int]] = {
        "/api/verify": (50, 3600),
        "*": (100, 900),
    }
    RATE_LIMIT_BACKEND: Literal["memory", "redis"] = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    WHITELIST_IPS: List[str] = []

    # ── Bot detection ───────────────────────────
    BOT_DETECTION_ENABLED: bool = True
    BOT_PROTECTED_PATHS: List[str] = ["/api/verify"]

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
