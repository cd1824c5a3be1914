import enum
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.platform.db.base import BaseModel
from app.platform.utils.encryption import EncryptedString


class ChannelType(enum.Enum):
    x = "x"
    telegram = "telegram"
    website = "website"
    email = "email"
    phone = "phone"


class ChannelStatus(enum.Enum):
    unverified = "unverified"
    verified = "verified"
    failed = "failed"


class ChannelKind(enum.Enum):
    """Variant tag: plain company channel or a channel run by a named employee"""
    company = "company"
    employee = "employee"


class EmployeeVerificationStatus(enum.Enum):
    pending = "pending"
    verified = "verified"
    rejected = "rejected"


class Channel(BaseModel):
    """
    A point of contact claimed by a company.

    status and verified_at move together: verified_at is set exactly when
    status is verified. Status only ever leaves `unverified`, never returns.
    """
    __tablename__ = "channels"

    company_id = Column(
        String, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False
    )
    kind = Column(Enum(ChannelKind), default=ChannelKind.company, nullable=False)
    type = Column(Enum(ChannelType), nullable=False)
    value = Column(String(512), nullable=False)
    description = Column(Text, nullable=True)

    status = Column(Enum(ChannelStatus), default=ChannelStatus.unverified, nullable=False, index=True)
    verified_at = Column(DateTime, nullable=True)

    # "metadata" is reserved on declarative classes
    channel_metadata = Column("metadata", JSON, default=dict, nullable=False)

    # Microsecond client-side timestamp; registry iteration order
    created_at = Column(
        DateTime(timezone=True), default=datetime.utcnow, server_default=func.now(), nullable=False
    )

    company = relationship("Company", back_populates="channels")
    employee_info = relationship(
        "EmployeeInfo",
        back_populates="channel",
        uselist=False,
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_channels_company_created", "company_id", "created_at"),
    )

    @property
    def is_employee_channel(self) -> bool:
        return self.kind == ChannelKind.employee

    def __repr__(self):
        return f"<Channel(id={self.id}, type={self.type}, value={self.value}, status={self.status})>"


class EmployeeInfo(BaseModel):
    __tablename__ = "employee_channel_info"

    channel_id = Column(
        String, ForeignKey("channels.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    name = Column(EncryptedString(512), nullable=False)
    role = Column(String(255), nullable=False)
    department = Column(String(255), nullable=True)
    verification_status = Column(
        Enum(EmployeeVerificationStatus), default=EmployeeVerificationStatus.pending, nullable=False
    )

    channel = relationship("Channel", back_populates="employee_info")
