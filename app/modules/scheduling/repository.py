"""Scheduling repository layer."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import ACTIVE_BOOKING_STATUSES
from app.modules.booking.models import Booking


class SchedulingRepository:
    """Read-only DB access for availability."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_taken_slots(self, agent_id: UUID, start_at: datetime, end_at: datetime) -> list[datetime]:
        """Instants in [start_at, end_at) occupied by active bookings of the agent."""
        stmt = (
            select(Booking.scheduled_at)
            .where(
                Booking.agent_id == agent_id,
                Booking.status.in_(ACTIVE_BOOKING_STATUSES),
                Booking.scheduled_at >= start_at,
                Booking.scheduled_at < end_at,
            )
            .order_by(Booking.scheduled_at.asc())
        )
        return list((await self.session.scalars(stmt)).all())
