import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, String
from sqlalchemy.orm import relationship

from app.platform.db.base import BaseModel


class SubscriptionStatus(enum.Enum):
    TRIAL = "TRIAL"
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"


class Company(BaseModel):
    __tablename__ = "companies"

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Email verification, unrelated to channel verification
    is_verified = Column(Boolean, default=False, nullable=False)
    verification_token = Column(String(255), nullable=True, index=True)
    verification_token_expires = Column(DateTime, nullable=True)

    reset_token = Column(String(255), nullable=True, index=True)
    reset_token_expires = Column(DateTime, nullable=True)

    subscription_status = Column(
        Enum(SubscriptionStatus), default=SubscriptionStatus.TRIAL, nullable=False
    )
    last_login = Column(DateTime, nullable=True)

    channels = relationship(
        "Channel", back_populates="company", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<Company(id={self.id}, email={self.email}, name={self.name})>"
