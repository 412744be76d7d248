"""Booking business logic layer."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db_session
from app.core.enums import BookingActionEnum
from app.core.metrics import record_booking_operation
from app.modules.booking.models import ACTIVE_SLOT_INDEX, REQUESTED_IN_FUTURE_CHECK, Booking
from app.modules.booking.repository import BookingRepository
from app.modules.booking.schemas import BookingCreate, BookingFilters
from app.modules.booking.state_machine import resolve_transition
from app.modules.identity.schemas import Principal
from app.modules.listings.repository import ListingRepository
from app.modules.scheduling.policy import WorkingHoursPolicy, is_bookable_slot
from app.shared.db_errors import CHECK_VIOLATION, UNIQUE_VIOLATION, is_constraint_violation
from app.shared.exceptions import (
    ConflictException,
    InternalException,
    NotFoundException,
    ValidationException,
)
from app.shared.utils import require_aware_utc, utc_now

settings = get_settings()
logger = logging.getLogger(__name__)


def _storage_failure(operation: str, exc: Exception, **context: object) -> InternalException:
    details = " ".join(f"{key}={value}" for key, value in context.items())
    logger.error("Booking %s failed in storage: %s", operation, details, exc_info=exc)
    return InternalException()


class BookingService:
    """Booking domain service: race-safe creation and status transitions."""

    def __init__(
        self,
        booking_repository: BookingRepository,
        listing_repository: ListingRepository,
        policy: WorkingHoursPolicy,
    ) -> None:
        self.booking_repository = booking_repository
        self.listing_repository = listing_repository
        self.policy = policy

    async def create_booking(self, payload: BookingCreate, actor: Principal) -> Booking:
        """Request a slot for the listing's agent.

        Availability is not re-read here. The partial unique index on
        (agent_id, scheduled_at) decides between concurrent writers, and its
        violation is reported as a conflict.
        """
        scheduled_at = require_aware_utc(payload.scheduled_at, "scheduled_at")
        if not is_bookable_slot(scheduled_at, self.policy):
            raise ValidationException("Invalid slot (must be a whole hour within working hours)")
        if scheduled_at <= utc_now():
            raise ValidationException("scheduled_at must be in the future")

        agent_id = await self.listing_repository.get_listing_owner_id(payload.listing_id)
        if agent_id is None:
            raise NotFoundException("Listing not found")

        try:
            booking = await self.booking_repository.create_booking(
                agent_id=agent_id,
                account_id=actor.subject_id,
                listing_id=payload.listing_id,
                scheduled_at=scheduled_at,
            )
        except IntegrityError as exc:
            if is_constraint_violation(exc, UNIQUE_VIOLATION, ACTIVE_SLOT_INDEX):
                record_booking_operation("create", "conflict")
                logger.info("Slot %s of agent %s already taken", scheduled_at.isoformat(), agent_id)
                raise ConflictException("Slot already taken") from exc
            if is_constraint_violation(exc, CHECK_VIOLATION, REQUESTED_IN_FUTURE_CHECK):
                record_booking_operation("create", "validation")
                raise ValidationException("scheduled_at must be in the future") from exc
            record_booking_operation("create", "error")
            raise _storage_failure(
                "create",
                exc,
                agent_id=agent_id,
                listing_id=payload.listing_id,
                scheduled_at=scheduled_at.isoformat(),
            ) from exc
        except SQLAlchemyError as exc:
            record_booking_operation("create", "error")
            raise _storage_failure(
                "create",
                exc,
                agent_id=agent_id,
                listing_id=payload.listing_id,
                scheduled_at=scheduled_at.isoformat(),
            ) from exc

        record_booking_operation("create", "created")
        logger.info("Booking %s requested for agent %s at %s", booking.id, agent_id, scheduled_at.isoformat())
        return booking

    async def transition_booking(
        self,
        booking_id: UUID,
        action: BookingActionEnum,
        actor: Principal,
    ) -> Booking:
        """Apply confirm/reject/cancel with a compare-and-swap on the observed status."""
        booking = await self.booking_repository.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFoundException("Booking not found")

        transition = resolve_transition(booking, action, actor)
        observed_status = booking.status

        try:
            updated = await self.booking_repository.update_status(
                booking_id=booking.id,
                expected_status=observed_status,
                new_status=transition.target,
            )
        except SQLAlchemyError as exc:
            record_booking_operation(action.value, "error")
            raise _storage_failure(
                action.value,
                exc,
                booking_id=booking.id,
                agent_id=booking.agent_id,
                scheduled_at=booking.scheduled_at.isoformat(),
            ) from exc

        if updated is None:
            record_booking_operation(action.value, "conflict")
            logger.warning(
                "Booking %s left status %s before %s could be applied",
                booking.id,
                observed_status.value,
                action.value,
            )
            raise ConflictException("Booking status changed concurrently; reload it and retry")

        record_booking_operation(action.value, "succeeded")
        logger.info("Booking %s moved %s -> %s", updated.id, observed_status.value, updated.status.value)
        return updated

    async def confirm_booking(self, booking_id: UUID, actor: Principal) -> Booking:
        """Agent accepts a requested booking."""
        return await self.transition_booking(booking_id, BookingActionEnum.CONFIRM, actor)

    async def reject_booking(self, booking_id: UUID, actor: Principal) -> Booking:
        """Agent declines a requested booking."""
        return await self.transition_booking(booking_id, BookingActionEnum.REJECT, actor)

    async def cancel_booking(self, booking_id: UUID, actor: Principal) -> Booking:
        """Requester withdraws a requested or confirmed booking."""
        return await self.transition_booking(booking_id, BookingActionEnum.CANCEL, actor)

    async def list_bookings(
        self,
        actor: Principal,
        filters: BookingFilters,
        limit: int,
        offset: int,
    ) -> tuple[list[Booking], int]:
        """List bookings of the actor: as agent or as requesting account."""
        start_at = end_at = None
        if (filters.start_at is None) != (filters.end_at is None):
            raise ValidationException("from and to must be provided together")
        if filters.start_at is not None and filters.end_at is not None:
            start_at = require_aware_utc(filters.start_at, "from")
            end_at = require_aware_utc(filters.end_at, "to")
            if start_at >= end_at:
                raise ValidationException("Invalid date range")

        return await self.booking_repository.list_bookings(
            actor.subject_id,
            actor.role,
            limit,
            offset,
            status=filters.status,
            start_at=start_at,
            end_at=end_at,
        )


async def get_booking_service(session: AsyncSession = Depends(get_db_session)) -> BookingService:
    """Dependency provider for booking service."""
    return BookingService(
        booking_repository=BookingRepository(session),
        listing_repository=ListingRepository(session),
        policy=WorkingHoursPolicy.from_settings(settings),
    )
