import enum
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from app.features.channels.models.channel import Channel
from app.features.channels.services.registry import ChannelRegistry
from app.platform.config import settings
from app.platform.exceptions import ValidationError


class MatchType(enum.Enum):
    exact = "exact"
    contains = "contains"  # input contains the registered value
    contained = "contained"  # registered value contains the input


@dataclass(frozen=True)
class VerificationResult:
    verified: bool
    company_name: Optional[str] = None
    company_id: Optional[str] = None
    channel_id: Optional[str] = None
    match_type: Optional[MatchType] = None


NOT_VERIFIED = VerificationResult(verified=False)


def normalize(value: str) -> str:
    return (value or "").strip().lower()


def match_value(normalized_input: str, registered_value: str, mode: str = "lenient") -> Optional[MatchType]:
    """Compare a normalized input against one registered value."""
    registered = normalize(registered_value)
    if not registered:
        return None

    if registered == normalized_input:
        return MatchType.exact
    if mode == "exact":
        return None
    if registered in normalized_input:
        return MatchType.contains
    if normalized_input in registered:
        return MatchType.contained
    return None


def find_match(
    input_value: str,
    candidates: Iterable[Tuple[Channel, str]],
    mode: str = "lenient",
) -> VerificationResult:
    """
    First (channel, company_name) candidate whose value matches, in iteration order.
    Candidates are expected to be verified channels already.
    """
    normalized_input = normalize(input_value)
    if not normalized_input:
        raise ValidationError("Input value is required")

    for channel, company_name in candidates:
        match_type = match_value(normalized_input, channel.value, mode)
        if match_type is not None:
            return VerificationResult(
                verified=True,
                company_name=company_name,
                company_id=str(channel.company_id),
                channel_id=str(channel.id),
                match_type=match_type,
            )
    return NOT_VERIFIED


class VerificationMatcher:
    """
    Resolves free text to a verified channel. Linear scan over verified
    channels; "lenient" mode also accepts containment in either direction.
    """

    def __init__(self, registry: ChannelRegistry, mode: Optional[str] = None):
        self.registry = registry
        self.mode = mode or settings.VERIFY_MATCH_MODE

    async def verify(self, input_value: str) -> VerificationResult:
        if not normalize(input_value):
            raise ValidationError("Input value is required")

        candidates = await self.registry.list_verified()
        return find_match(input_value, candidates, self.mode)
