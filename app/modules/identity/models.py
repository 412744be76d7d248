"""Identity ORM models.

Agents and accounts are owned by the identity provider; only the columns
needed for foreign keys and display are mirrored here.
"""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, BaseModelMixin


class Agent(BaseModelMixin, Base):
    """Agent responsible for listings; the bookable resource."""

    __tablename__ = "agents"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(128), nullable=False)


class Account(BaseModelMixin, Base):
    """Marketplace account that requests bookings."""

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(128), nullable=False)
