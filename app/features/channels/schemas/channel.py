from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.features.channels.models.channel import Channel


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case keys, serializes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmployeeInfoIn(CamelModel):
    name: str
    role: str
    department: Optional[str] = None


class ChannelCreate(CamelModel):
    type: str
    value: str
    description: Optional[str] = None
    is_employee_channel: bool = False
    employee_info: Optional[EmployeeInfoIn] = None


class EmployeeInfoOut(CamelModel):
    name: str
    role: str
    department: Optional[str] = None
    verification_status: str


class ChannelResponse(CamelModel):
    id: str
    company_id: str
    kind: str
    type: str
    value: str
    description: Optional[str] = None
    status: str
    verified_at: Optional[datetime] = None
    is_employee_channel: bool
    employee_info: Optional[EmployeeInfoOut] = None
    metadata: Dict[str, Any] = {}
    created_at: datetime

    @classmethod
    def from_channel(cls, channel: Channel) -> "ChannelResponse":
        employee_info = None
        if channel.is_employee_channel and channel.employee_info is not None:
            info = channel.employee_info
            employee_info = EmployeeInfoOut(
                name=info.name,
                role=info.role,
                department=info.department,
                verification_status=info.verification_status.value,
            )

        return cls(
            id=str(channel.id),
            company_id=str(channel.company_id),
            kind=channel.kind.value,
            type=channel.type.value,
            value=channel.value,
            description=channel.description,
            status=channel.status.value,
            verified_at=channel.verified_at,
            is_employee_channel=channel.is_employee_channel,
            employee_info=employee_info,
            metadata=dict(channel.channel_metadata or {}),
            created_at=channel.created_at,
        )


class ChannelListResponse(CamelModel):
    channels: List[ChannelResponse]
