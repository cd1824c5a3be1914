from datetime import datetime, timedelta
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.auth.models.company import Company, SubscriptionStatus
from app.features.auth.schemas.auth import (
    CompanySummary,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)
from app.features.auth.utils.security import (
    create_access_token,
    generate_verification_token,
    hash_password,
    verify_password,
)
from app.platform.config import settings
from app.platform.exceptions import AuthError, ValidationError
from app.platform.logger import get_logger

logger = get_logger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def register_company(self, request: RegisterRequest) -> Tuple[Company, str]:
        """Create an unverified company. Returns the company and its email verification token."""
        email = request.email.lower()

        if await self.get_company_by_email(email):
            raise ValidationError("Email already in use")

        token = generate_verification_token()
        company = Company(
            name=request.name,
            email=email,
            password_hash=hash_password(request.password),
            is_verified=False,
            verification_token=token,
            verification_token_expires=datetime.utcnow()
            + timedelta(hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS),
            subscription_status=SubscriptionStatus.TRIAL,
        )

        try:
            self.db.add(company)
            await self.db.commit()
            await self.db.refresh(company)
        except IntegrityError:
            await self.db.rollback()
            raise ValidationError("Email already in use")

        logger.info(f"Company registered - company: {company.id}, email: {email}")
        return company, token

    async def verify_email(self, token: str) -> Company:
        """Redeem an email verification token"""
        result = await self.db.execute(
            select(Company).where(
                Company.verification_token == token,
                Company.verification_token_expires > datetime.utcnow(),
            )
        )
        company = result.scalar_one_or_none()

        if not company:
            logger.warning("Email verification failed - invalid or expired token")
            raise ValidationError("Invalid or expired verification token")

        company.is_verified = True
        company.verification_token = None
        company.verification_token_expires = None
        await self.db.commit()
        await self.db.refresh(company)

        logger.info(f"Email verified - company: {company.id}")
        return company

    async def login_company(self, request: LoginRequest) -> LoginResponse:
        company = await self.get_company_by_email(request.email)

        if not company or not verify_password(request.password, company.password_hash):
            logger.warning(f"Login failed - invalid credentials - email: {request.email}")
            raise AuthError("Invalid credentials")

        if not company.is_verified:
            raise AuthError("Please verify your email before logging in", needsVerification=True)

        company.last_login = datetime.utcnow()
        await self.db.commit()
        await self.db.refresh(company)

        token = create_access_token(data={"sub": str(company.id), "email": company.email})

        return LoginResponse(
            token=token,
            company=CompanySummary(
                id=str(company.id),
                name=company.name,
                email=company.email,
                subscription_status=company.subscription_status.value,
            ),
        )

    async def request_password_reset(self, email: str) -> Optional[Tuple[Company, str]]:
        """
        Store a fresh reset token for the company, if it exists.
        Returns None for unknown emails so callers can answer identically either way.
        """
        company = await self.get_company_by_email(email)
        if not company:
            logger.info(f"Password reset requested for unknown email: {email}")
            return None

        token = generate_verification_token()
        company.reset_token = token
        company.reset_token_expires = datetime.utcnow() + timedelta(
            hours=settings.RESET_TOKEN_EXPIRE_HOURS
        )
        await self.db.commit()

        logger.info(f"Password reset token issued - company: {company.id}")
        return company, token

    async def reset_password(self, token: str, new_password: str) -> Company:
        """Replace the password hash and clear the reset token"""
        result = await self.db.execute(
            select(Company).where(
                Company.reset_token == token,
                Company.reset_token_expires > datetime.utcnow(),
            )
        )
        company = result.scalar_one_or_none()

        if not company:
            logger.warning("Password reset failed - invalid or expired token")
            raise ValidationError("Invalid or expired reset token")

        company.password_hash = hash_password(new_password)
        company.reset_token = None
        company.reset_token_expires = None
        await self.db.commit()
        await self.db.refresh(company)

        logger.info(f"Password reset successful - company: {company.id}")
        return company

    async def get_company_by_id(self, company_id: str) -> Optional[Company]:
        result = await self.db.execute(select(Company).where(Company.id == company_id))
        return result.scalar_one_or_none()

    async def get_company_by_email(self, email: str) -> Optional[Company]:
        result = await self.db.execute(select(Company).where(Company.email == email.lower()))
        return result.scalar_one_or_none()
