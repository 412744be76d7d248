"""Booking ORM models."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, Enum as SAEnum, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, BaseModelMixin
from app.core.enums import BookingStatusEnum

ACTIVE_SLOT_INDEX = "uq_bookings_agent_id_scheduled_at_active"
REQUESTED_IN_FUTURE_CHECK = "ck_bookings_requested_in_future"


class Booking(BaseModelMixin, Base):
    """Appointment request between an account and the agent of a listing."""

    __tablename__ = "bookings"
    __table_args__ = (
        # Arbiter of the no-double-booking rule.
        Index(
            ACTIVE_SLOT_INDEX,
            "agent_id",
            "scheduled_at",
            unique=True,
            postgresql_where=text("status IN ('requested', 'confirmed')"),
        ),
        Index("ix_bookings_agent_id_status_scheduled_at", "agent_id", "status", "scheduled_at"),
        CheckConstraint(
            "status IN ('confirmed', 'cancelled', 'rejected') OR scheduled_at > CURRENT_TIMESTAMP",
            name="requested_in_future",
        ),
    )

    scheduled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[BookingStatusEnum] = mapped_column(
        SAEnum(
            BookingStatusEnum,
            name="booking_status_enum",
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        default=BookingStatusEnum.REQUESTED,
        nullable=False,
    )

    agent_id: Mapped[UUID] = mapped_column(ForeignKey("agents.id", ondelete="CASCADE"), nullable=False)
    account_id: Mapped[UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    listing_id: Mapped[UUID] = mapped_column(
        ForeignKey("listings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
