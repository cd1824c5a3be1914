from pydantic import BaseModel, Field, field_validator


class ReportCreate(BaseModel):
    reporter_name: str = Field(..., max_length=255)
    reported_channel: str = Field(..., max_length=512)
    reason: str = Field(..., max_length=5000)

    @field_validator("reporter_name", "reported_channel", "reason")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("All fields are required")
        return v


class ReportResponse(BaseModel):
    success: bool = True
    id: str
