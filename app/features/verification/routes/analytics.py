from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.auth.models.company import Company
from app.features.auth.routes.auth import get_current_company
from app.features.verification.services.analytics import VerificationAnalyticsService
from app.platform.db.session import get_db
from app.platform.response import api_response

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("", response_model=dict, summary="Verification stats for the authenticated company")
async def get_analytics(
    company: Company = Depends(get_current_company),
    db: AsyncSession = Depends(get_db),
):
    summary = await VerificationAnalyticsService(db).company_summary(company.id)
    return api_response(summary)
