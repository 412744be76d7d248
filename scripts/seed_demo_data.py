"""Seed idempotent demo data for local/non-production environments."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import close_engine, session_scope
from app.core.enums import RoleEnum
from app.core.security import create_access_token
from app.modules.identity.models import Account, Agent
from app.modules.identity.repository import IdentityRepository
from app.modules.listings.models import Listing
from app.modules.listings.repository import ListingRepository

DEMO_AGENT_EMAIL = "demo-agent@estate-appointments.dev"
DEMO_ACCOUNT_EMAIL = "demo-account@estate-appointments.dev"
DEMO_LISTING_TITLE = "Demo two-bedroom apartment"


@dataclass(slots=True)
class SeedStats:
    agent_created: bool = False
    account_created: bool = False
    listing_created: bool = False
    agent_id: str | None = None
    account_id: str | None = None
    listing_id: str | None = None


async def _ensure_agent(session: AsyncSession) -> tuple[Agent, bool]:
    agent = await IdentityRepository(session).get_agent_by_email(DEMO_AGENT_EMAIL)
    if agent is not None:
        return agent, False
    agent = Agent(email=DEMO_AGENT_EMAIL, display_name="Demo Agent")
    session.add(agent)
    await session.flush()
    return agent, True


async def _ensure_account(session: AsyncSession) -> tuple[Account, bool]:
    account = await IdentityRepository(session).get_account_by_email(DEMO_ACCOUNT_EMAIL)
    if account is not None:
        return account, False
    account = Account(email=DEMO_ACCOUNT_EMAIL, display_name="Demo Account")
    session.add(account)
    await session.flush()
    return account, True


async def _ensure_listing(session: AsyncSession, agent: Agent) -> tuple[Listing, bool]:
    listing = await ListingRepository(session).get_listing_by_title(agent.id, DEMO_LISTING_TITLE)
    if listing is not None:
        return listing, False
    listing = Listing(agent_id=agent.id, title=DEMO_LISTING_TITLE)
    session.add(listing)
    await session.flush()
    return listing, True


async def _run_seed(*, allow_production: bool) -> SeedStats:
    settings = get_settings()
    app_env = settings.app_env.strip().lower()
    if app_env in {"production", "prod"} and not allow_production:
        raise RuntimeError(
            "Refusing to seed demo data in production. "
            "Re-run with --allow-production only if you are absolutely sure.",
        )

    stats = SeedStats()

    async with session_scope() as session:
        agent, stats.agent_created = await _ensure_agent(session)
        account, stats.account_created = await _ensure_account(session)
        listing, stats.listing_created = await _ensure_listing(session, agent)

        stats.agent_id = str(agent.id)
        stats.account_id = str(account.id)
        stats.listing_id = str(listing.id)

    return stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Seed idempotent demo data for EstateAppointments (agent, account, "
            "listing) and print access tokens for both parties."
        ),
    )
    parser.add_argument(
        "--allow-production",
        action="store_true",
        help="Allow seeding even when APP_ENV is production/prod.",
    )
    return parser


def _print_summary(stats: SeedStats) -> None:
    print("Demo seed completed.")
    print(f"- Agent created: {stats.agent_created} ({stats.agent_id})")
    print(f"- Account created: {stats.account_created} ({stats.account_id})")
    print(f"- Listing created: {stats.listing_created} ({stats.listing_id})")
    print("")
    print("Demo access tokens (non-production only):")
    print(f"- agent:   {create_access_token(subject=stats.agent_id, role=RoleEnum.AGENT.value)}")
    print(f"- account: {create_access_token(subject=stats.account_id, role=RoleEnum.ACCOUNT.value)}")


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    try:
        stats = asyncio.run(_run_seed(allow_production=args.allow_production))
    except Exception as exc:
        print(f"Demo seed failed: {exc}")
        return 1
    finally:
        asyncio.run(close_engine())

    _print_summary(stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
