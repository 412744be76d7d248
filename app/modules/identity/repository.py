"""Identity repository layer."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.identity.models import Account, Agent


class IdentityRepository:
    """Read access to mirrored agents and accounts."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def agent_exists(self, agent_id: UUID) -> bool:
        stmt = select(exists().where(Agent.id == agent_id))
        return bool(await self.session.scalar(stmt))

    async def get_agent_by_email(self, email: str) -> Agent | None:
        stmt = select(Agent).where(Agent.email == email)
        return await self.session.scalar(stmt)

    async def get_account_by_email(self, email: str) -> Account | None:
        stmt = select(Account).where(Account.email == email)
        return await self.session.scalar(stmt)
