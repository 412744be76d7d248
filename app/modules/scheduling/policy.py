"""Working-hours policy and the bookable slot grid.

Everything here is pure: no I/O, no clock. The grid is hour-granular and
aligned to hour boundaries in the policy timezone; instants are yielded in
UTC.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from app.core.config import Settings

SLOT_DURATION = timedelta(hours=1)

# Instants a day away from the datetime limits stay representable in any zone.
EARLIEST_INSTANT = datetime.min.replace(tzinfo=UTC) + timedelta(days=1)
LATEST_INSTANT = datetime.max.replace(tzinfo=UTC) - timedelta(days=1)


@dataclass(frozen=True, slots=True)
class WorkingHoursPolicy:
    """Weekday and hour-of-day filter shared by the grid and booking validation."""

    open_hour: int = 9
    close_hour: int = 18
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo("UTC"))
    weekdays: frozenset[int] = frozenset({0, 1, 2, 3, 4})

    @classmethod
    def from_settings(cls, settings: Settings) -> WorkingHoursPolicy:
        return cls(
            open_hour=settings.working_hours_start,
            close_hour=settings.working_hours_end,
            timezone=ZoneInfo(settings.working_hours_timezone),
            weekdays=frozenset(settings.working_weekdays),
        )

    def allows(self, instant: datetime) -> bool:
        """True if `instant` is an hour boundary inside working hours."""
        if not EARLIEST_INSTANT <= instant <= LATEST_INSTANT:
            return False
        local = instant.astimezone(self.timezone)
        if (local.minute, local.second, local.microsecond) != (0, 0, 0):
            return False
        return local.weekday() in self.weekdays and self.open_hour <= local.hour < self.close_hour


def _first_boundary_at_or_after(start_at: datetime, policy: WorkingHoursPolicy) -> datetime:
    local = start_at.astimezone(policy.timezone)
    boundary = local.replace(minute=0, second=0, microsecond=0).astimezone(UTC)
    if boundary < start_at:
        boundary += SLOT_DURATION
    return boundary


@dataclass(frozen=True, slots=True)
class SlotGrid:
    """Lazy, finite and restartable sequence of bookable instants in [start_at, end_at)."""

    start_at: datetime
    end_at: datetime
    policy: WorkingHoursPolicy

    def __iter__(self) -> Iterator[datetime]:
        start_at = max(self.start_at, EARLIEST_INSTANT)
        end_at = min(self.end_at, LATEST_INSTANT)
        if start_at >= end_at:
            return
        cursor = _first_boundary_at_or_after(start_at, self.policy)
        while cursor < end_at:
            if self.policy.allows(cursor):
                yield cursor
            cursor += SLOT_DURATION


def generate_slot_grid(start_at: datetime, end_at: datetime, policy: WorkingHoursPolicy) -> SlotGrid:
    """Build the grid of theoretically bookable instants for a half-open range."""
    return SlotGrid(start_at=start_at.astimezone(UTC), end_at=end_at.astimezone(UTC), policy=policy)


def is_bookable_slot(instant: datetime, policy: WorkingHoursPolicy) -> bool:
    """Same predicate the grid applies, for validating a single requested slot."""
    if instant.tzinfo is None:
        return False
    return policy.allows(instant)


def day_bounds(day: date, policy: WorkingHoursPolicy) -> tuple[datetime, datetime]:
    """UTC half-open bounds of a calendar day in the policy timezone."""
    start_local = datetime.combine(day, time.min, tzinfo=policy.timezone)
    end_local = datetime.combine(day + timedelta(days=1), time.min, tzinfo=policy.timezone)
    return start_local.astimezone(UTC), end_local.astimezone(UTC)


def group_slots_by_day(
    slots: Iterable[datetime],
    policy: WorkingHoursPolicy,
) -> list[tuple[date, list[int]]]:
    """Group slots into (local day, local hours) pairs, keeping slot order."""
    days: dict[date, list[int]] = {}
    for slot in slots:
        local = slot.astimezone(policy.timezone)
        days.setdefault(local.date(), []).append(local.hour)
    return list(days.items())
