from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.channels.dependencies.registry import get_channel_registry
from app.features.channels.services.registry import ChannelRegistry
from app.features.verification.schemas.verify import VerifyRequest, VerifyResponse
from app.features.verification.services.analytics import VerificationAnalyticsService
from app.features.verification.services.matcher import VerificationMatcher
from app.platform.db.session import get_db
from app.platform.response import api_response

router = APIRouter(tags=["Verification"])


@router.post(
    "/verify",
    response_model=dict,
    summary="Check a handle",
    description="Public lookup: does this handle, URL, email or number belong to a verified company?",
)
async def verify_channel(
    request: VerifyRequest,
    registry: ChannelRegistry = Depends(get_channel_registry),
    db: AsyncSession = Depends(get_db),
):
    result = await VerificationMatcher(registry).verify(request.input_value)
    await VerificationAnalyticsService(db).record_attempt(request.input_value, result)

    response = VerifyResponse(verified=result.verified, company=result.company_name)
    return api_response(response.model_dump(exclude_none=True))
