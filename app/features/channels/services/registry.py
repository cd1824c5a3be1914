from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import noload, selectinload

from app.features.auth.models.company import Company
from app.features.channels.models.channel import (
    Channel,
    ChannelKind,
    ChannelStatus,
    ChannelType,
    EmployeeInfo,
    EmployeeVerificationStatus,
)
from app.platform.exceptions import NotFoundError, StatusTransitionError, ValidationError
from app.platform.logger import get_logger

logger = get_logger(__name__)

TERMINAL_STATUSES = (ChannelStatus.verified, ChannelStatus.failed)


def parse_channel_type(channel_type: Union[str, ChannelType, None]) -> ChannelType:
    if isinstance(channel_type, ChannelType):
        return channel_type
    try:
        return ChannelType((channel_type or "").strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in ChannelType)
        raise ValidationError(f"Invalid channel type '{channel_type}'. Expected one of: {allowed}")


def parse_channel_status(status: Union[str, ChannelStatus]) -> ChannelStatus:
    if isinstance(status, ChannelStatus):
        return status
    try:
        return ChannelStatus(status)
    except ValueError:
        raise ValidationError(f"Invalid channel status '{status}'")


def _field(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


class ChannelRegistry:
    """
    Repository for Channel records, bound to one database session.

    Every mutation commits on its own; there are no multi-record transactions
    apart from create_many, which inserts a pre-validated batch at once.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─────────────────────────────────────────────────────────────
    # Creation
    # ─────────────────────────────────────────────────────────────

    def build(
        self,
        company_id: str,
        channel_type: Union[str, ChannelType],
        value: str,
        is_employee_channel: bool = False,
        employee_info: Optional[Any] = None,
        description: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Channel:
        """Validate input and return an unsaved, unverified Channel."""
        if not company_id:
            raise ValidationError("A company is required to register a channel")

        value = (value or "").strip()
        if not value:
            raise ValidationError("Channel value is required")

        parsed_type = parse_channel_type(channel_type)

        channel = Channel(
            company_id=company_id,
            kind=ChannelKind.employee if is_employee_channel else ChannelKind.company,
            type=parsed_type,
            value=value,
            description=description,
            status=ChannelStatus.unverified,
            verified_at=None,
            channel_metadata=dict(metadata or {}),
        )

        if is_employee_channel:
            if employee_info is None:
                raise ValidationError("Employee information is required for employee channels")

            name = (_field(employee_info, "name") or "").strip()
            role = (_field(employee_info, "role") or "").strip()
            if not name or not role:
                raise ValidationError("Employee name and role are required for employee channels")

            department = (_field(employee_info, "department") or "").strip() or None
            channel.employee_info = EmployeeInfo(
                name=name,
                role=role,
                department=department,
                verification_status=EmployeeVerificationStatus.pending,
            )
        elif employee_info is not None:
            raise ValidationError("Employee information is only allowed on employee channels")

        return channel

    async def create(
        self,
        company_id: str,
        channel_type: Union[str, ChannelType],
        value: str,
        is_employee_channel: bool = False,
        employee_info: Optional[Any] = None,
        description: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Channel:
        channel = self.build(
            company_id,
            channel_type,
            value,
            is_employee_channel=is_employee_channel,
            employee_info=employee_info,
            description=description,
            metadata=metadata,
        )

        self.db.add(channel)
        await self.db.commit()

        logger.info(
            f"Channel registered - channel: {channel.id}, company: {company_id}, "
            f"type: {channel.type.value}, kind: {channel.kind.value}"
        )
        return await self._reload(channel.id)

    async def create_many(self, company_id: str, rows: Sequence[Mapping[str, Any]]) -> List[Channel]:
        """
        Insert a batch of channels in one transaction. Every row is validated
        before anything is added to the session, so one bad row writes nothing.
        """
        channels = [
            self.build(
                company_id,
                row.get("channel_type"),
                row.get("value"),
                is_employee_channel=bool(row.get("is_employee_channel")),
                employee_info=row.get("employee_info"),
                description=row.get("description"),
                metadata=row.get("metadata"),
            )
            for row in rows
        ]

        if not channels:
            return []

        self.db.add_all(channels)
        await self.db.commit()

        ids = [channel.id for channel in channels]
        logger.info(f"Channel batch registered - company: {company_id}, count: {len(ids)}")

        result = await self.db.execute(
            select(Channel)
            .options(selectinload(Channel.employee_info))
            .where(Channel.id.in_(ids))
            .execution_options(populate_existing=True)
        )
        by_id = {channel.id: channel for channel in result.scalars().all()}
        return [by_id[channel_id] for channel_id in ids]

    # ─────────────────────────────────────────────────────────────
    # Removal
    # ─────────────────────────────────────────────────────────────

    async def remove(self, channel_id: str, company_id: Optional[str] = None) -> None:
        """
        Delete a channel. Missing ids (or ids owned by another company when
        company_id is given) are a no-op.
        """
        query = select(Channel).where(Channel.id == channel_id)
        if company_id is not None:
            query = query.where(Channel.company_id == company_id)

        result = await self.db.execute(query)
        channel = result.scalar_one_or_none()
        if channel is None:
            logger.info(f"Channel removal skipped - channel not found: {channel_id}")
            return

        await self.db.delete(channel)
        await self.db.commit()
        logger.info(f"Channel removed - channel: {channel_id}, company: {channel.company_id}")

    # ─────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────

    async def get(self, channel_id: str) -> Optional[Channel]:
        result = await self.db.execute(
            select(Channel)
            .options(selectinload(Channel.employee_info))
            .where(Channel.id == channel_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_by_company(self, company_id: str) -> List[Channel]:
        result = await self.db.execute(
            select(Channel)
            .options(selectinload(Channel.employee_info))
            .where(Channel.company_id == company_id)
            .order_by(Channel.created_at, Channel.id)
        )
        return list(result.scalars().all())

    async def list_verified(self) -> List[Tuple[Channel, str]]:
        """All verified channels with their owning company's name, in registry order."""
        result = await self.db.execute(
            select(Channel, Company.name)
            .options(noload(Channel.employee_info))
            .join(Company, Company.id == Channel.company_id)
            .where(Channel.status == ChannelStatus.verified)
            .order_by(Channel.created_at, Channel.id)
        )
        return [(channel, company_name) for channel, company_name in result.all()]

    async def list_unverified(self, company_id: str, channel_ids: Sequence[str]) -> List[Channel]:
        """
        The caller's unverified channels among channel_ids, de-duplicated and in
        the order first requested. Unknown, foreign and terminal ids are skipped.
        """
        unique_ids = list(dict.fromkeys(channel_ids))
        if not unique_ids:
            return []

        result = await self.db.execute(
            select(Channel)
            .options(selectinload(Channel.employee_info))
            .where(
                Channel.id.in_(unique_ids),
                Channel.company_id == company_id,
                Channel.status == ChannelStatus.unverified,
            )
        )
        by_id = {channel.id: channel for channel in result.scalars().all()}
        return [by_id[channel_id] for channel_id in unique_ids if channel_id in by_id]

    # ─────────────────────────────────────────────────────────────
    # Status transitions
    # ─────────────────────────────────────────────────────────────

    async def update_status(
        self,
        channel_id: str,
        status: Union[str, ChannelStatus],
        verified_at: Optional[datetime] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Channel:
        """
        Move an unverified channel to verified or failed.

        verified_at defaults to now for verified and must be absent otherwise.
        Terminal records are never rewritten; the write is conditional on the
        row still being unverified, so concurrent callers cannot both win.
        """
        status = parse_channel_status(status)

        channel = await self.get(channel_id)
        if channel is None:
            raise NotFoundError(f"Channel {channel_id} not found")

        if status == ChannelStatus.unverified:
            raise StatusTransitionError("A channel cannot be moved back to unverified")

        if status == ChannelStatus.verified:
            verified_at = verified_at or datetime.utcnow()
        elif verified_at is not None:
            raise ValidationError("verifiedAt can only be set on verified channels")

        if channel.status in TERMINAL_STATUSES:
            raise StatusTransitionError(
                f"Channel {channel_id} is already {channel.status.value}; "
                "remove and re-create it to verify again"
            )

        merged_metadata = {**(channel.channel_metadata or {}), **(metadata or {})}

        result = await self.db.execute(
            update(Channel)
            .where(Channel.id == channel_id, Channel.status == ChannelStatus.unverified)
            .values(
                {
                    Channel.status: status,
                    Channel.verified_at: verified_at,
                    Channel.channel_metadata: merged_metadata,
                }
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            # Zero rows written; commit ends the transaction without expiring loaded instances
            await self.db.commit()
            raise StatusTransitionError(f"Channel {channel_id} was updated by another request")

        await self.db.commit()
        logger.info(f"Channel status updated - channel: {channel_id}, status: {status.value}")
        return await self._reload(channel_id)

    async def _reload(self, channel_id: str) -> Channel:
        channel = await self.get(channel_id)
        if channel is None:
            raise NotFoundError(f"Channel {channel_id} not found")
        return channel
