from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.reports.schemas.report import ReportCreate, ReportResponse
from app.features.reports.services.report import create_report
from app.platform.db.session import get_db
from app.platform.response import api_response

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post(
    "",
    response_model=dict,
    status_code=status.HTTP_201_CREATED,
    summary="Report a suspicious channel",
)
async def report_channel(
    request: ReportCreate,
    db: AsyncSession = Depends(get_db),
):
    report = await create_report(db, request)
    return api_response(ReportResponse(id=str(report.id)), status_code=status.HTTP_201_CREATED)
