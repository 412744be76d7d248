"""Booking API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import AwareDatetime

from app.core.enums import BookingStatusEnum, RoleEnum
from app.modules.booking.schemas import (
    BookingCreate,
    BookingCreated,
    BookingFilters,
    BookingRead,
    BookingTransitionRead,
)
from app.modules.booking.service import BookingService, get_booking_service
from app.modules.identity.schemas import Principal
from app.modules.identity.service import get_current_principal, require_roles
from app.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/booking", tags=["booking"])


@router.post("", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    service: BookingService = Depends(get_booking_service),
    current_principal: Principal = Depends(require_roles(RoleEnum.ACCOUNT)),
) -> BookingCreated:
    """Request a booking for a listing slot."""
    booking = await service.create_booking(payload, current_principal)
    return BookingCreated.model_validate(booking)


@router.post("/{booking_id}/confirm", response_model=BookingTransitionRead)
async def confirm_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_principal: Principal = Depends(get_current_principal),
) -> BookingTransitionRead:
    """Confirm booking from REQUESTED to CONFIRMED."""
    booking = await service.confirm_booking(booking_id, current_principal)
    return BookingTransitionRead.model_validate(booking)


@router.post("/{booking_id}/reject", response_model=BookingTransitionRead)
async def reject_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_principal: Principal = Depends(get_current_principal),
) -> BookingTransitionRead:
    """Reject booking from REQUESTED to REJECTED."""
    booking = await service.reject_booking(booking_id, current_principal)
    return BookingTransitionRead.model_validate(booking)


@router.post("/{booking_id}/cancel", response_model=BookingTransitionRead)
async def cancel_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_principal: Principal = Depends(get_current_principal),
) -> BookingTransitionRead:
    """Cancel a requested or confirmed booking."""
    booking = await service.cancel_booking(booking_id, current_principal)
    return BookingTransitionRead.model_validate(booking)


@router.get("/my", response_model=Page[BookingRead])
async def list_my_bookings(
    booking_status: BookingStatusEnum | None = Query(default=None, alias="status"),
    start_at: AwareDatetime | None = Query(default=None, alias="from"),
    end_at: AwareDatetime | None = Query(default=None, alias="to"),
    pagination=Depends(get_pagination_params),
    service: BookingService = Depends(get_booking_service),
    current_principal: Principal = Depends(get_current_principal),
) -> Page[BookingRead]:
    """List bookings for current principal."""
    filters = BookingFilters(status=booking_status, start_at=start_at, end_at=end_at)
    items, total = await service.list_bookings(current_principal, filters, pagination.limit, pagination.offset)
    serialized = [BookingRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)
