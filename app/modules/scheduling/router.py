"""Scheduling API router."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import AwareDatetime

from app.modules.identity.service import get_current_principal
from app.modules.scheduling.schemas import (
    AvailabilityDay,
    AvailabilityDaysRead,
    AvailabilityRead,
    DaySlotsRead,
)
from app.modules.scheduling.service import AvailabilityService, get_availability_service

router = APIRouter(prefix="/scheduling", tags=["scheduling"])


@router.get("/agents/{agent_id}/availability", response_model=AvailabilityRead)
async def get_agent_availability(
    agent_id: UUID,
    start_at: AwareDatetime | None = Query(default=None, alias="from"),
    end_at: AwareDatetime | None = Query(default=None, alias="to"),
    service: AvailabilityService = Depends(get_availability_service),
    _principal=Depends(get_current_principal),
) -> AvailabilityRead:
    """List free slots of an agent."""
    result = await service.get_agent_availability(agent_id, start_at, end_at)
    return AvailabilityRead.model_validate(result)


@router.get("/listings/{listing_id}/availability", response_model=AvailabilityRead)
async def get_listing_availability(
    listing_id: UUID,
    start_at: AwareDatetime | None = Query(default=None, alias="from"),
    end_at: AwareDatetime | None = Query(default=None, alias="to"),
    service: AvailabilityService = Depends(get_availability_service),
    _principal=Depends(get_current_principal),
) -> AvailabilityRead:
    """List free slots of the agent handling a listing."""
    result = await service.get_listing_availability(listing_id, start_at, end_at)
    return AvailabilityRead.model_validate(result)


@router.get("/listings/{listing_id}/availability/days", response_model=AvailabilityDaysRead)
async def get_listing_availability_days(
    listing_id: UUID,
    start_at: AwareDatetime | None = Query(default=None, alias="from"),
    end_at: AwareDatetime | None = Query(default=None, alias="to"),
    service: AvailabilityService = Depends(get_availability_service),
    _principal=Depends(get_current_principal),
) -> AvailabilityDaysRead:
    """List free hours of a listing grouped by day."""
    result, days = await service.get_listing_availability_days(listing_id, start_at, end_at)
    return AvailabilityDaysRead(
        agent_id=result.agent_id,
        listing_id=listing_id,
        start_at=result.start_at,
        end_at=result.end_at,
        timezone=service.policy.timezone.key,
        days=[AvailabilityDay(day=day, hours=hours) for day, hours in days],
    )


@router.get("/listings/{listing_id}/availability/day", response_model=DaySlotsRead)
async def get_listing_day_slots(
    listing_id: UUID,
    day: date = Query(),
    service: AvailabilityService = Depends(get_availability_service),
    _principal=Depends(get_current_principal),
) -> DaySlotsRead:
    """List free slots of a listing on one day."""
    result = await service.get_listing_day_slots(listing_id, day)
    return DaySlotsRead(agent_id=result.agent_id, listing_id=listing_id, day=day, slots=result.slots)
