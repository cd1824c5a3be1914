import asyncio
import random
from typing import Awaitable, Callable, Optional

from app.features.channels.models.channel import Channel
from app.platform.config import settings

# An ownership check answers "does this company really control this channel?"
OwnershipCheck = Callable[[Channel], Awaitable[bool]]


class SimulatedOwnershipCheck:
    """
    Placeholder for a real ownership proof (DNS TXT record, OAuth grant,
    signed challenge). Sleeps, then passes with a fixed probability.
    """

    def __init__(
        self,
        success_rate: Optional[float] = None,
        delay_seconds: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        self.success_rate = settings.VERIFICATION_SUCCESS_RATE if success_rate is None else success_rate
        self.delay_seconds = (
            settings.VERIFICATION_SIMULATED_DELAY_SECONDS if delay_seconds is None else delay_seconds
        )
        self.rng = rng or random.Random()

    async def __call__(self, channel: Channel) -> bool:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return self.rng.random() < self.success_rate
