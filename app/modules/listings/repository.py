"""Listing repository layer."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.listings.models import Listing


class ListingRepository:
    """Listing lookups needed by scheduling and booking."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_listing_owner_id(self, listing_id: UUID) -> UUID | None:
        """Return the agent handling the listing, or None if it does not exist."""
        stmt = select(Listing.agent_id).where(Listing.id == listing_id)
        return await self.session.scalar(stmt)

    async def get_listing_by_title(self, agent_id: UUID, title: str) -> Listing | None:
        stmt = select(Listing).where(Listing.agent_id == agent_id, Listing.title == title)
        return await self.session.scalar(stmt)
