from sqlalchemy.ext.asyncio import AsyncSession

from app.features.reports.models.report import Report, ReportStatus
from app.features.reports.schemas.report import ReportCreate
from app.platform.logger import get_logger

logger = get_logger(__name__)


async def create_report(db: AsyncSession, report_data: ReportCreate) -> Report:
    report = Report(
        reporter_name=report_data.reporter_name,
        reported_channel=report_data.reported_channel,
        reason=report_data.reason,
        status=ReportStatus.open,
    )
    db.add(report)
    await db.commit()
    await db.refresh(report)

    logger.info(f"Report received - report: {report.id}, channel: {report.reported_channel!r}")
    return report
