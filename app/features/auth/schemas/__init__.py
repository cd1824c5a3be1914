from app.features.auth.schemas.auth import (
    AuthMessage,
    CompanySummary,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ResetPasswordRequest,
)

__all__ = [
    "AuthMessage",
    "CompanySummary",
    "ForgotPasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "ResetPasswordRequest",
]
