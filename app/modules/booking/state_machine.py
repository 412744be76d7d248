"""Booking status transitions and who may trigger them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from app.core.enums import BookingActionEnum, BookingStatusEnum, RoleEnum
from app.modules.identity.schemas import Principal
from app.shared.exceptions import ForbiddenException, ValidationException


class BookingParties(Protocol):
    agent_id: UUID
    account_id: UUID
    status: BookingStatusEnum


@dataclass(frozen=True, slots=True)
class Transition:
    action: BookingActionEnum
    sources: frozenset[BookingStatusEnum]
    target: BookingStatusEnum
    actor_role: RoleEnum


TRANSITIONS: dict[BookingActionEnum, Transition] = {
    BookingActionEnum.CONFIRM: Transition(
        action=BookingActionEnum.CONFIRM,
        sources=frozenset({BookingStatusEnum.REQUESTED}),
        target=BookingStatusEnum.CONFIRMED,
        actor_role=RoleEnum.AGENT,
    ),
    BookingActionEnum.REJECT: Transition(
        action=BookingActionEnum.REJECT,
        sources=frozenset({BookingStatusEnum.REQUESTED}),
        target=BookingStatusEnum.REJECTED,
        actor_role=RoleEnum.AGENT,
    ),
    BookingActionEnum.CANCEL: Transition(
        action=BookingActionEnum.CANCEL,
        sources=frozenset({BookingStatusEnum.REQUESTED, BookingStatusEnum.CONFIRMED}),
        target=BookingStatusEnum.CANCELLED,
        actor_role=RoleEnum.ACCOUNT,
    ),
}


def is_authorized(booking: BookingParties, transition: Transition, actor: Principal) -> bool:
    """Agent actions belong to the booking's agent, account actions to its requester."""
    if actor.role != transition.actor_role:
        return False
    if transition.actor_role == RoleEnum.AGENT:
        return booking.agent_id == actor.subject_id
    return booking.account_id == actor.subject_id


def resolve_transition(
    booking: BookingParties,
    action: BookingActionEnum,
    actor: Principal,
) -> Transition:
    """Return the transition to apply or raise Forbidden / Validation."""
    transition = TRANSITIONS[action]
    if not is_authorized(booking, transition, actor):
        raise ForbiddenException(f"You cannot {action.value} this booking")
    if booking.status not in transition.sources:
        raise ValidationException(f"Cannot {action.value} booking in status '{booking.status.value}'")
    return transition
