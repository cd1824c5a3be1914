from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.auth.models.company import Company
from app.features.auth.schemas.auth import (
    AuthMessage,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from app.features.auth.services.auth_service import AuthService
from app.features.auth.utils.security import decode_access_token
from app.platform.config import settings
from app.platform.db.session import get_db
from app.platform.exceptions import AuthError, ValidationError
from app.platform.response import api_response
from app.platform.services.email import send_password_reset_email, send_verification_email

router = APIRouter(prefix="/auth", tags=["Authentication"])
security = HTTPBearer(auto_error=False)

RESET_REQUESTED_MESSAGE = "If your email exists in our system, you will receive a password reset link"


async def get_current_company(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Company:
    """
    Dependency to get the authenticated company from the Bearer token.
    """
    if credentials is None:
        raise AuthError("Not authenticated")

    try:
        payload = decode_access_token(credentials.credentials)
    except ValueError as e:
        raise AuthError(str(e))

    company_id = payload.get("sub")
    if company_id is None:
        raise AuthError("Invalid authentication credentials")

    company = await AuthService(db).get_company_by_id(company_id)
    if company is None:
        raise AuthError("Company not found")

    return company


@router.post(
    "/register",
    response_model=dict,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new company",
    description="Create a company account; a verification link is emailed in the background",
)
async def register(
    request: RegisterRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    company, token = await AuthService(db).register_company(request)

    background_tasks.add_task(
        send_verification_email,
        to_email=company.email,
        company_name=company.name,
        token=token,
    )

    return api_response(
        AuthMessage(
            message="Registration successful. Please check your email to verify your account."
        ),
        status_code=status.HTTP_201_CREATED,
    )


@router.get(
    "/verify-email",
    summary="Verify email address",
    description="Redeem the emailed verification token, then redirect to the login page",
)
async def verify_email(
    token: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    if not token:
        raise ValidationError("Verification token is required")

    await AuthService(db).verify_email(token)
    return RedirectResponse(
        url=f"{settings.FRONTEND_URL}/login?verified=true",
        status_code=status.HTTP_302_FOUND,
    )


@router.post(
    "/login",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Login company",
    description="Authenticate with email and password; returns a bearer token",
)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    token_response = await AuthService(db).login_company(request)
    return api_response(token_response)


@router.post("/forgot-password", response_model=dict, summary="Request a password reset link")
async def forgot_password(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    """Same answer whether or not the email is registered"""
    issued = await AuthService(db).request_password_reset(request.email)
    if issued:
        company, token = issued
        background_tasks.add_task(send_password_reset_email, company.email, token)

    return api_response(AuthMessage(message=RESET_REQUESTED_MESSAGE))


@router.post("/reset-password", response_model=dict, summary="Reset password with a reset token")
async def reset_password(
    request: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db),
):
    await AuthService(db).reset_password(request.token, request.password)
    return api_response(
        AuthMessage(
            message="Password has been reset successfully. You can now log in with your new password."
        )
    )
