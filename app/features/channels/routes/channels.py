from fastapi import APIRouter, Depends, Response, status

from app.features.auth.models.company import Company
from app.features.auth.routes.auth import get_current_company
from app.features.channels.dependencies.registry import get_channel_registry
from app.features.channels.schemas.channel import (
    ChannelCreate,
    ChannelListResponse,
    ChannelResponse,
)
from app.features.channels.services.registry import ChannelRegistry
from app.platform.response import api_response

router = APIRouter(prefix="/channels", tags=["Channels"])


@router.post(
    "",
    response_model=dict,
    status_code=status.HTTP_201_CREATED,
    summary="Register a channel",
    description="Register a company or employee channel; it starts out unverified",
)
async def create_channel(
    request: ChannelCreate,
    company: Company = Depends(get_current_company),
    registry: ChannelRegistry = Depends(get_channel_registry),
):
    channel = await registry.create(
        company.id,
        request.type,
        request.value,
        is_employee_channel=request.is_employee_channel,
        employee_info=request.employee_info.model_dump() if request.employee_info else None,
        description=request.description,
        metadata={"source": "manual"},
    )
    return api_response(ChannelResponse.from_channel(channel), status_code=status.HTTP_201_CREATED)


@router.get(
    "",
    response_model=dict,
    summary="List channels",
    description="All channels of the authenticated company, oldest first",
)
async def list_channels(
    company: Company = Depends(get_current_company),
    registry: ChannelRegistry = Depends(get_channel_registry),
):
    channels = await registry.list_by_company(company.id)
    return api_response(
        ChannelListResponse(channels=[ChannelResponse.from_channel(c) for c in channels])
    )


@router.delete(
    "/{channel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a channel",
    description="Idempotent: removing an unknown channel also returns 204",
)
async def remove_channel(
    channel_id: str,
    company: Company = Depends(get_current_company),
    registry: ChannelRegistry = Depends(get_channel_registry),
):
    await registry.remove(channel_id, company_id=company.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
