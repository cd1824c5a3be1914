from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.channels.models.channel import Channel, ChannelStatus
from app.features.verification.models.verification_attempt import VerificationAttempt
from app.features.verification.schemas.verify import AnalyticsResponse, AnalyticsWindowStats
from app.features.verification.services.matcher import VerificationResult
from app.platform.logger import get_logger

logger = get_logger(__name__)


class VerificationAnalyticsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def record_attempt(self, input_value: str, result: VerificationResult) -> VerificationAttempt:
        attempt = VerificationAttempt(
            input_value=input_value[:1024],
            verified=result.verified,
            match_type=result.match_type.value if result.match_type else None,
            company_id=result.company_id,
            channel_id=result.channel_id,
        )
        self.db.add(attempt)
        await self.db.commit()

        logger.info(
            f"Verification attempt: {input_value!r} - Result: "
            f"{'Verified' if result.verified else 'Not found'}"
            + (f" ({result.match_type.value} match on channel {result.channel_id})" if result.verified else "")
        )
        return attempt

    async def _count_attempts(self, company_id: str, since: Optional[datetime] = None) -> int:
        query = select(func.count(VerificationAttempt.id)).where(
            VerificationAttempt.company_id == company_id
        )
        if since is not None:
            query = query.where(VerificationAttempt.created_at >= since)
        return (await self.db.execute(query)).scalar_one()

    async def _count_channels(self, company_id: str, status: Optional[ChannelStatus] = None) -> int:
        query = select(func.count(Channel.id)).where(Channel.company_id == company_id)
        if status is not None:
            query = query.where(Channel.status == status)
        return (await self.db.execute(query)).scalar_one()

    async def company_summary(self, company_id: str) -> AnalyticsResponse:
        """Lookups that resolved to this company's channels, plus channel counts"""
        now = datetime.utcnow()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)

        return AnalyticsResponse(
            total_verifications=await self._count_attempts(company_id),
            verified_count=await self._count_channels(company_id, ChannelStatus.verified),
            channel_count=await self._count_channels(company_id),
            stats=AnalyticsWindowStats(
                today=await self._count_attempts(company_id, start_of_day),
                week=await self._count_attempts(company_id, now - timedelta(days=7)),
                month=await self._count_attempts(company_id, now - timedelta(days=30)),
            ),
        )
