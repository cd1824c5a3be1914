from typing import Optional

from pydantic import BaseModel, field_validator


class VerifyRequest(BaseModel):
    input_value: str

    @field_validator("input_value")
    @classmethod
    def validate_input_value(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Input value is required")
        return v


class VerifyResponse(BaseModel):
    verified: bool
    company: Optional[str] = None


class AnalyticsWindowStats(BaseModel):
    today: int
    week: int
    month: int


class AnalyticsResponse(BaseModel):
    total_verifications: int
    verified_count: int
    channel_count: int
    stats: AnalyticsWindowStats
