"""Booking schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict

from app.core.enums import BookingStatusEnum


class BookingCreate(BaseModel):
    """Create booking request."""

    listing_id: UUID
    scheduled_at: AwareDatetime


class BookingFilters(BaseModel):
    """Optional filters for listing own bookings."""

    status: BookingStatusEnum | None = None
    start_at: datetime | None = None
    end_at: datetime | None = None


class BookingCreated(BaseModel):
    """Create booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    status: BookingStatusEnum
    scheduled_at: datetime
    listing_id: UUID
    agent_id: UUID
    account_id: UUID


class BookingTransitionRead(BaseModel):
    """Status transition response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    status: BookingStatusEnum
    scheduled_at: datetime


class BookingRead(BaseModel):
    """Booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    scheduled_at: datetime
    status: BookingStatusEnum
    agent_id: UUID
    account_id: UUID
    listing_id: UUID
    created_at: datetime
    updated_at: datetime
