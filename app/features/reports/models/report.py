import enum

from sqlalchemy import Column, Enum, String, Text

from app.platform.db.base import BaseModel
from app.platform.utils.encryption import EncryptedString


class ReportStatus(enum.Enum):
    open = "open"
    reviewed = "reviewed"
    dismissed = "dismissed"


class Report(BaseModel):
    """A member of the public flagging a channel as a suspected impersonation"""
    __tablename__ = "reports"

    reporter_name = Column(EncryptedString(512), nullable=False)
    reported_channel = Column(String(512), nullable=False, index=True)
    reason = Column(Text, nullable=False)
    status = Column(Enum(ReportStatus), default=ReportStatus.open, nullable=False)
