"""Core enums used across modules."""

from enum import StrEnum


class RoleEnum(StrEnum):
    """Roles supplied by the identity provider."""

    AGENT = "agent"
    ACCOUNT = "account"


class BookingStatusEnum(StrEnum):
    """Booking lifecycle status."""

    REQUESTED = "requested"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


# Statuses that occupy an agent slot.
ACTIVE_BOOKING_STATUSES = frozenset({BookingStatusEnum.REQUESTED, BookingStatusEnum.CONFIRMED})


class BookingActionEnum(StrEnum):
    """Status transitions that can be requested on a booking."""

    CONFIRM = "confirm"
    REJECT = "reject"
    CANCEL = "cancel"
