from app.features.channels.models.channel import (
    Channel,
    ChannelKind,
    ChannelStatus,
    ChannelType,
    EmployeeInfo,
    EmployeeVerificationStatus,
)

__all__ = [
    "Channel",
    "ChannelKind",
    "ChannelStatus",
    "ChannelType",
    "EmployeeInfo",
    "EmployeeVerificationStatus",
]
