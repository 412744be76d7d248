"""Booking repository layer."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import BookingStatusEnum, RoleEnum
from app.modules.booking.models import Booking


class BookingRepository:
    """DB operations for booking domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_booking(
        self,
        agent_id: UUID,
        account_id: UUID,
        listing_id: UUID,
        scheduled_at: datetime,
    ) -> Booking:
        """Insert a REQUESTED booking.

        The insert runs in a SAVEPOINT so an IntegrityError leaves the
        surrounding transaction usable; the error itself propagates.
        """
        booking = Booking(
            agent_id=agent_id,
            account_id=account_id,
            listing_id=listing_id,
            scheduled_at=scheduled_at,
            status=BookingStatusEnum.REQUESTED,
        )
        async with self.session.begin_nested():
            self.session.add(booking)
        return booking

    async def get_booking_by_id(self, booking_id: UUID) -> Booking | None:
        stmt = select(Booking).where(Booking.id == booking_id)
        return await self.session.scalar(stmt)

    async def update_status(
        self,
        booking_id: UUID,
        expected_status: BookingStatusEnum,
        new_status: BookingStatusEnum,
    ) -> Booking | None:
        """Compare-and-swap status; None means the row no longer had `expected_status`."""
        stmt = (
            update(Booking)
            .where(Booking.id == booking_id, Booking.status == expected_status)
            .values(status=new_status)
            .returning(Booking)
            .execution_options(populate_existing=True, synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_bookings(
        self,
        user_id: UUID,
        role_name: RoleEnum,
        limit: int,
        offset: int,
        status: BookingStatusEnum | None = None,
        start_at: datetime | None = None,
        end_at: datetime | None = None,
    ) -> tuple[list[Booking], int]:
        base_stmt: Select[tuple[Booking]] = select(Booking)

        if role_name == RoleEnum.AGENT:
            base_stmt = base_stmt.where(Booking.agent_id == user_id)
        else:
            base_stmt = base_stmt.where(Booking.account_id == user_id)

        if status is not None:
            base_stmt = base_stmt.where(Booking.status == status)
        if start_at is not None and end_at is not None:
            base_stmt = base_stmt.where(Booking.scheduled_at >= start_at, Booking.scheduled_at < end_at)

        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = int((await self.session.scalar(count_stmt)) or 0)

        stmt = base_stmt.order_by(Booking.scheduled_at.asc(), Booking.id.asc()).limit(limit).offset(offset)
        items = (await self.session.scalars(stmt)).all()
        return list(items), total
