from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.channels.services.registry import ChannelRegistry
from app.platform.db.session import get_db


async def get_channel_registry(db: AsyncSession = Depends(get_db)) -> ChannelRegistry:
    """A registry bound to the request's database session."""
    return ChannelRegistry(db)
