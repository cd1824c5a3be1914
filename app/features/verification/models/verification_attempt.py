from sqlalchemy import Boolean, Column, ForeignKey, String

from app.platform.db.base import BaseModel


class VerificationAttempt(BaseModel):
    """Audit row for one public verification lookup"""
    __tablename__ = "verification_attempts"

    input_value = Column(String(1024), nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    match_type = Column(String(20), nullable=True)

    company_id = Column(String, ForeignKey("companies.id", ondelete="SET NULL"), index=True, nullable=True)
    channel_id = Column(String, ForeignKey("channels.id", ondelete="SET NULL"), nullable=True)
