from typing import List, Optional

from pydantic import Field

from app.features.channels.schemas.channel import CamelModel, ChannelResponse, EmployeeInfoIn


class CsvChannelRecord(CamelModel):
    """One row of an uploaded sheet, already parsed client-side"""
    channel: str
    type: str
    description: Optional[str] = None
    is_employee_channel: bool = False
    employee_info: Optional[EmployeeInfoIn] = None


class CsvUploadRequest(CamelModel):
    channels: List[CsvChannelRecord]


class CsvVerifyRequest(CamelModel):
    verification_ids: List[str] = Field(..., description="Channel ids returned by the upload")


class CsvUploadResponse(CamelModel):
    message: str
    count: int
    verifications: List[ChannelResponse]


class CsvVerifyResponse(CamelModel):
    message: str
    results: List[ChannelResponse]
