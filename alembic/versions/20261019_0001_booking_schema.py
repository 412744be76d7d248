"""Booking schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


booking_status_enum = sa.Enum(
    "requested",
    "confirmed",
    "cancelled",
    "rejected",
    name="booking_status_enum",
    native_enum=False,
    create_constraint=True,
)


def _id_col() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False)


def _created_col() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def _updated_col() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False)


def upgrade() -> None:
    op.create_table(
        "agents",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=128), nullable=False),
        sa.UniqueConstraint("email", name="uq_agents_email"),
    )
    op.create_index("ix_agents_email", "agents", ["email"], unique=False)

    op.create_table(
        "accounts",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=128), nullable=False),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=False)

    op.create_table(
        "listings",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("agent_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(["agent_id"], ["agents.id"], name="fk_listings_agent_id_agents", ondelete="CASCADE"),
    )
    op.create_index("ix_listings_agent_id", "listings", ["agent_id"], unique=False)

    op.create_table(
        "bookings",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", booking_status_enum, nullable=False),
        sa.Column("agent_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("account_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("listing_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(["agent_id"], ["agents.id"], name="fk_bookings_agent_id_agents", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["account_id"],
            ["accounts.id"],
            name="fk_bookings_account_id_accounts",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["listing_id"],
            ["listings.id"],
            name="fk_bookings_listing_id_listings",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "status IN ('confirmed', 'cancelled', 'rejected') OR scheduled_at > CURRENT_TIMESTAMP",
            name="ck_bookings_requested_in_future",
        ),
    )
    op.create_index("ix_bookings_account_id", "bookings", ["account_id"], unique=False)
    op.create_index("ix_bookings_listing_id", "bookings", ["listing_id"], unique=False)
    op.create_index(
        "ix_bookings_agent_id_status_scheduled_at",
        "bookings",
        ["agent_id", "status", "scheduled_at"],
        unique=False,
    )
    op.create_index(
        "uq_bookings_agent_id_scheduled_at_active",
        "bookings",
        ["agent_id", "scheduled_at"],
        unique=True,
        postgresql_where=sa.text("status IN ('requested', 'confirmed')"),
    )


def downgrade() -> None:
    op.drop_index("uq_bookings_agent_id_scheduled_at_active", table_name="bookings")
    op.drop_index("ix_bookings_agent_id_status_scheduled_at", table_name="bookings")
    op.drop_index("ix_bookings_listing_id", table_name="bookings")
    op.drop_index("ix_bookings_account_id", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_listings_agent_id", table_name="listings")
    op.drop_table("listings")

    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_table("accounts")

    op.drop_index("ix_agents_email", table_name="agents")
    op.drop_table("agents")
