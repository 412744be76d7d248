"""Scheduling business logic layer."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db_session
from app.modules.identity.repository import IdentityRepository
from app.modules.listings.repository import ListingRepository
from app.modules.scheduling.policy import (
    WorkingHoursPolicy,
    day_bounds,
    generate_slot_grid,
    group_slots_by_day,
)
from app.modules.scheduling.repository import SchedulingRepository
from app.modules.scheduling.schemas import AvailabilityResult
from app.shared.exceptions import NotFoundException, ValidationException
from app.shared.utils import require_aware_utc, utc_now

settings = get_settings()
logger = logging.getLogger(__name__)


class AvailabilityService:
    """Free-slot computation: working-hours grid minus active bookings.

    Results are advisory. Booking creation never relies on them.
    """

    def __init__(
        self,
        scheduling_repository: SchedulingRepository,
        listing_repository: ListingRepository,
        identity_repository: IdentityRepository,
        policy: WorkingHoursPolicy,
        default_window_days: int = settings.availability_default_window_days,
        max_window_days: int = settings.availability_max_window_days,
    ) -> None:
        self.scheduling_repository = scheduling_repository
        self.listing_repository = listing_repository
        self.identity_repository = identity_repository
        self.policy = policy
        self.default_window_days = default_window_days
        self.max_window_days = max_window_days

    def _resolve_range(
        self,
        start_at: datetime | None,
        end_at: datetime | None,
    ) -> tuple[datetime, datetime]:
        start = require_aware_utc(start_at, "from") if start_at is not None else utc_now()
        if end_at is None:
            try:
                end = start + timedelta(days=self.default_window_days)
            except OverflowError as exc:
                raise ValidationException("Date range is out of bounds") from exc
        else:
            end = require_aware_utc(end_at, "to")
        if start >= end:
            raise ValidationException("Invalid date range")
        if end - start > timedelta(days=self.max_window_days):
            raise ValidationException(f"Date range must not exceed {self.max_window_days} days")
        return start, end

    async def _resolve_listing_agent(self, listing_id: UUID) -> UUID:
        agent_id = await self.listing_repository.get_listing_owner_id(listing_id)
        if agent_id is None:
            raise NotFoundException("Listing not found")
        return agent_id

    async def _free_slots(self, agent_id: UUID, start_at: datetime, end_at: datetime) -> list[datetime]:
        grid = generate_slot_grid(start_at, end_at, self.policy)
        taken = set(await self.scheduling_repository.list_taken_slots(agent_id, start_at, end_at))
        return [slot for slot in grid if slot not in taken]

    async def get_agent_availability(
        self,
        agent_id: UUID,
        start_at: datetime | None,
        end_at: datetime | None,
    ) -> AvailabilityResult:
        """Free slots of an agent in [start_at, end_at)."""
        start, end = self._resolve_range(start_at, end_at)
        if not await self.identity_repository.agent_exists(agent_id):
            raise NotFoundException("Agent not found")

        slots = await self._free_slots(agent_id, start, end)
        return AvailabilityResult(agent_id=agent_id, listing_id=None, start_at=start, end_at=end, slots=slots)

    async def get_listing_availability(
        self,
        listing_id: UUID,
        start_at: datetime | None,
        end_at: datetime | None,
    ) -> AvailabilityResult:
        """Free slots of the agent handling the listing in [start_at, end_at)."""
        start, end = self._resolve_range(start_at, end_at)
        agent_id = await self._resolve_listing_agent(listing_id)

        slots = await self._free_slots(agent_id, start, end)
        logger.debug("Listing %s availability: %s free slots", listing_id, len(slots))
        return AvailabilityResult(
            agent_id=agent_id,
            listing_id=listing_id,
            start_at=start,
            end_at=end,
            slots=slots,
        )

    async def get_listing_availability_days(
        self,
        listing_id: UUID,
        start_at: datetime | None,
        end_at: datetime | None,
    ) -> tuple[AvailabilityResult, list[tuple[date, list[int]]]]:
        """Free hours of the listing's agent grouped by local day."""
        result = await self.get_listing_availability(listing_id, start_at, end_at)
        return result, group_slots_by_day(result.slots, self.policy)

    async def get_listing_day_slots(self, listing_id: UUID, day: date) -> AvailabilityResult:
        """Free slots of the listing's agent on one local calendar day."""
        try:
            start, end = day_bounds(day, self.policy)
        except OverflowError as exc:
            raise ValidationException("day is out of bounds") from exc
        return await self.get_listing_availability(listing_id, start, end)


async def get_availability_service(session: AsyncSession = Depends(get_db_session)) -> AvailabilityService:
    """Dependency provider for availability service."""
    return AvailabilityService(
        scheduling_repository=SchedulingRepository(session),
        listing_repository=ListingRepository(session),
        identity_repository=IdentityRepository(session),
        policy=WorkingHoursPolicy.from_settings(settings),
    )
