"""Scheduling schemas."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True, slots=True)
class AvailabilityResult:
    """Free slots of one agent in a range."""

    agent_id: UUID
    listing_id: UUID | None
    start_at: datetime
    end_at: datetime
    slots: list[datetime]


class AvailabilityRead(BaseModel):
    """Free slot list response schema."""

    model_config = ConfigDict(from_attributes=True)

    agent_id: UUID
    listing_id: UUID | None
    start_at: datetime
    end_at: datetime
    slots: list[datetime]


class AvailabilityDay(BaseModel):
    """Free working hours of one local day."""

    day: date
    hours: list[int]


class AvailabilityDaysRead(BaseModel):
    """Free hours grouped by day."""

    agent_id: UUID
    listing_id: UUID
    start_at: datetime
    end_at: datetime
    timezone: str
    days: list[AvailabilityDay]


class DaySlotsRead(BaseModel):
    """Free slots of a single day."""

    agent_id: UUID
    listing_id: UUID
    day: date
    slots: list[datetime]
