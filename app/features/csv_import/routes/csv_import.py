from fastapi import APIRouter, Depends, status

from app.features.auth.models.company import Company
from app.features.auth.routes.auth import get_current_company
from app.features.channels.schemas.channel import ChannelResponse
from app.features.csv_import.dependencies.pipeline import get_import_pipeline
from app.features.csv_import.schemas.csv_import import (
    CsvUploadRequest,
    CsvUploadResponse,
    CsvVerifyRequest,
    CsvVerifyResponse,
)
from app.features.csv_import.services.pipeline import BulkImportPipeline
from app.platform.response import api_response

router = APIRouter(prefix="/csv", tags=["CSV Import"])


@router.post(
    "/upload",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Upload parsed CSV rows",
    description="Create one unverified channel per row. One invalid row rejects the whole upload.",
)
async def upload_csv(
    request: CsvUploadRequest,
    company: Company = Depends(get_current_company),
    pipeline: BulkImportPipeline = Depends(get_import_pipeline),
):
    channels = await pipeline.import_batch(company.id, request.channels)
    return api_response(
        CsvUploadResponse(
            message="CSV data uploaded successfully",
            count=len(channels),
            verifications=[ChannelResponse.from_channel(c) for c in channels],
        )
    )


@router.post(
    "/verify",
    response_model=dict,
    summary="Verify uploaded channels",
    description="""
    Run ownership checks for the given channel ids.

    - Only the caller's unverified channels are processed; others are skipped
    - Each channel ends up verified or failed; one failure does not affect the rest
    - 404 when none of the ids is eligible
    """,
)
async def verify_csv_data(
    request: CsvVerifyRequest,
    company: Company = Depends(get_current_company),
    pipeline: BulkImportPipeline = Depends(get_import_pipeline),
):
    channels = await pipeline.verify_batch(company.id, request.verification_ids)
    return api_response(
        CsvVerifyResponse(
            message="Verification process completed",
            results=[ChannelResponse.from_channel(c) for c in channels],
        )
    )
