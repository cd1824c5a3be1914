import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence

from app.features.channels.models.channel import Channel, ChannelStatus
from app.features.channels.services.registry import ChannelRegistry
from app.features.csv_import.services.ownership import OwnershipCheck
from app.platform.config import settings
from app.platform.exceptions import NotFoundError, StatusTransitionError, ValidationError
from app.platform.logger import get_logger

logger = get_logger(__name__)


@dataclass
class AttemptOutcome:
    verified: bool
    error: Optional[str] = None


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


class BulkImportPipeline:
    """
    Batch creation of unverified channels followed by per-record ownership checks.

    Import is all-or-nothing at validation time. Verification is per record:
    a failing, raising or hanging check marks only its own channel failed.
    """

    def __init__(
        self,
        registry: ChannelRegistry,
        ownership_check: OwnershipCheck,
        timeout_seconds: Optional[float] = None,
    ):
        self.registry = registry
        self.ownership_check = ownership_check
        self.timeout_seconds = (
            settings.VERIFICATION_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )

    async def import_batch(self, company_id: str, records: Sequence[Any]) -> List[Channel]:
        uploaded_at = datetime.utcnow().isoformat()
        rows = []

        for index, record in enumerate(records):
            channel_value = _field(record, "channel")
            channel_type = _field(record, "type")
            if not channel_value or not str(channel_value).strip():
                raise ValidationError(f"Record {index + 1}: 'channel' is required")
            if not channel_type or not str(channel_type).strip():
                raise ValidationError(f"Record {index + 1}: 'type' is required")

            employee_info = _field(record, "employee_info")
            if employee_info is not None and hasattr(employee_info, "model_dump"):
                employee_info = employee_info.model_dump()

            rows.append(
                {
                    "channel_type": channel_type,
                    "value": channel_value,
                    "description": _field(record, "description"),
                    "is_employee_channel": bool(_field(record, "is_employee_channel")),
                    "employee_info": employee_info,
                    "metadata": {"source": "csv_upload", "uploadedAt": uploaded_at},
                }
            )

        try:
            channels = await self.registry.create_many(company_id, rows)
        except ValidationError as e:
            logger.warning(f"Batch import rejected - company: {company_id}, reason: {e.message}")
            raise

        logger.info(f"Batch import complete - company: {company_id}, count: {len(channels)}")
        return channels

    async def verify_batch(self, company_id: str, channel_ids: Sequence[str]) -> List[Channel]:
        channels = await self.registry.list_unverified(company_id, channel_ids)
        if not channels:
            raise NotFoundError("No unverified records found")

        ids = [channel.id for channel in channels]

        # Checks fan out concurrently; writes go through the session one at a time
        outcomes = await asyncio.gather(
            *(self._attempt(channel_id, channel) for channel_id, channel in zip(ids, channels))
        )

        results = []
        for channel_id, outcome in zip(ids, outcomes):
            settled = await self._apply(channel_id, outcome)
            if settled is not None:
                results.append(settled)

        verified = sum(1 for channel in results if channel.status == ChannelStatus.verified)
        logger.info(
            f"Batch verification complete - company: {company_id}, "
            f"processed: {len(results)}, verified: {verified}, failed: {len(results) - verified}"
        )
        return results

    async def _attempt(self, channel_id: str, channel: Channel) -> AttemptOutcome:
        try:
            verified = await asyncio.wait_for(self.ownership_check(channel), timeout=self.timeout_seconds)
            return AttemptOutcome(verified=bool(verified))
        except asyncio.TimeoutError:
            logger.warning(f"Verification timed out for channel {channel_id}")
            return AttemptOutcome(verified=False, error="Verification timed out")
        except Exception as e:
            logger.error(f"Verification failed for channel {channel_id}: {e}")
            return AttemptOutcome(verified=False, error=str(e) or type(e).__name__)

    async def _apply(self, channel_id: str, outcome: AttemptOutcome) -> Optional[Channel]:
        metadata = {
            "verificationAttemptedAt": datetime.utcnow().isoformat(),
            "verificationResult": "success" if outcome.verified else "failure",
        }
        if outcome.error:
            metadata["verificationError"] = outcome.error

        try:
            return await self.registry.update_status(
                channel_id,
                ChannelStatus.verified if outcome.verified else ChannelStatus.failed,
                metadata=metadata,
            )
        except StatusTransitionError:
            # Another request settled this channel first; report its current state
            logger.info(f"Channel {channel_id} already settled, skipping")
            return await self.registry.get(channel_id)
        except NotFoundError:
            logger.info(f"Channel {channel_id} was removed during verification, skipping")
            return None
