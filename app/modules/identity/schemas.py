"""Identity schemas."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.core.enums import RoleEnum


class Principal(BaseModel):
    """Authenticated caller as asserted by the identity provider."""

    model_config = ConfigDict(frozen=True)

    subject_id: UUID
    role: RoleEnum
