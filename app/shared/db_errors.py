"""Inspect driver-level constraint violations wrapped by SQLAlchemy."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"
CHECK_VIOLATION = "23514"


@dataclass(frozen=True, slots=True)
class ConstraintViolation:
    sqlstate: str | None
    constraint_name: str | None


def describe_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    """Extract SQLSTATE and constraint name from asyncpg or psycopg errors."""
    orig = exc.orig
    # asyncpg errors arrive wrapped in SQLAlchemy's DBAPI adapter.
    driver_error = getattr(orig, "__cause__", None)

    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is None:
        sqlstate = getattr(driver_error, "sqlstate", None)

    constraint_name = getattr(driver_error, "constraint_name", None) or getattr(orig, "constraint_name", None)
    if constraint_name is None:
        diag = getattr(orig, "diag", None)
        constraint_name = getattr(diag, "constraint_name", None)

    return ConstraintViolation(sqlstate=sqlstate, constraint_name=constraint_name)


def is_constraint_violation(exc: IntegrityError, sqlstate: str, constraint_name: str) -> bool:
    """True when the error carries `sqlstate` for `constraint_name`.

    An unnamed unique violation still matches: bookings carry a single
    unique index. Other unnamed violations never match.
    """
    violation = describe_integrity_error(exc)
    if violation.sqlstate != sqlstate:
        return False
    if violation.constraint_name is None:
        return sqlstate == UNIQUE_VIOLATION
    return violation.constraint_name == constraint_name
