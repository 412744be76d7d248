"""Identity boundary: resolve the caller from a bearer token."""

from __future__ import annotations

from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from app.core.enums import RoleEnum
from app.core.security import bearer_scheme, decode_token
from app.modules.identity.schemas import Principal


def _invalid_token(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def principal_from_token(token: str) -> Principal:
    """Build principal from access token claims; the claims are trusted as-is."""
    payload = decode_token(token)
    if payload.get("type") != "access":
        raise _invalid_token("Invalid access token")

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or not role:
        raise _invalid_token("Token subject or role is missing")

    try:
        return Principal(subject_id=UUID(str(subject)), role=RoleEnum(role))
    except ValueError as exc:
        raise _invalid_token("Token subject or role is invalid") from exc


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> Principal:
    """Resolve currently authenticated principal from bearer token."""
    return principal_from_token(credentials.credentials)


def require_roles(*roles: RoleEnum):
    """Dependency factory for role-based access."""

    async def _checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Operation not permitted for your role",
            )
        return principal

    return _checker
