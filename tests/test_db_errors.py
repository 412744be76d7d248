from __future__ import annotations

from types import SimpleNamespace

from sqlalchemy.exc import IntegrityError

from app.modules.booking.models import ACTIVE_SLOT_INDEX, REQUESTED_IN_FUTURE_CHECK
from app.shared.db_errors import (
    CHECK_VIOLATION,
    UNIQUE_VIOLATION,
    describe_integrity_error,
    is_constraint_violation,
)


class AsyncpgLikeError(Exception):
    def __init__(self, sqlstate: str, constraint_name: str | None) -> None:
        super().__init__("duplicate key value violates unique constraint")
        self.sqlstate = sqlstate
        self.constraint_name = constraint_name


class AdaptedDriverError(Exception):
    """Mimics SQLAlchemy's asyncpg adapter: sqlstate on the wrapper, details on the cause."""

    def __init__(self, cause: AsyncpgLikeError) -> None:
        super().__init__(str(cause))
        self.sqlstate = cause.sqlstate
        self.__cause__ = cause


class PsycopgLikeError(Exception):
    def __init__(self, pgcode: str, constraint_name: str | None) -> None:
        super().__init__("duplicate key value violates unique constraint")
        self.pgcode = pgcode
        self.diag = SimpleNamespace(constraint_name=constraint_name)


def _integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO bookings", {}, orig)


def test_asyncpg_adapter_error_exposes_constraint() -> None:
    exc = _integrity_error(AdaptedDriverError(AsyncpgLikeError(UNIQUE_VIOLATION, ACTIVE_SLOT_INDEX)))

    violation = describe_integrity_error(exc)

    assert violation.sqlstate == UNIQUE_VIOLATION
    assert violation.constraint_name == ACTIVE_SLOT_INDEX
    assert is_constraint_violation(exc, UNIQUE_VIOLATION, ACTIVE_SLOT_INDEX)


def test_psycopg_error_exposes_constraint() -> None:
    exc = _integrity_error(PsycopgLikeError(UNIQUE_VIOLATION, ACTIVE_SLOT_INDEX))

    assert is_constraint_violation(exc, UNIQUE_VIOLATION, ACTIVE_SLOT_INDEX)


def test_other_constraint_or_state_does_not_match() -> None:
    other_index = _integrity_error(AsyncpgLikeError(UNIQUE_VIOLATION, "uq_agents_email"))
    check = _integrity_error(AsyncpgLikeError(CHECK_VIOLATION, ACTIVE_SLOT_INDEX))

    assert not is_constraint_violation(other_index, UNIQUE_VIOLATION, ACTIVE_SLOT_INDEX)
    assert not is_constraint_violation(check, UNIQUE_VIOLATION, ACTIVE_SLOT_INDEX)


def test_missing_constraint_name_matches_on_sqlstate() -> None:
    exc = _integrity_error(AsyncpgLikeError(UNIQUE_VIOLATION, None))

    assert is_constraint_violation(exc, UNIQUE_VIOLATION, ACTIVE_SLOT_INDEX)


def test_error_without_driver_details_is_unknown() -> None:
    violation = describe_integrity_error(_integrity_error(Exception("boom")))

    assert violation.sqlstate is None
    assert violation.constraint_name is None


def test_unnamed_check_violation_does_not_match_a_specific_check() -> None:
    exc = _integrity_error(AsyncpgLikeError(CHECK_VIOLATION, None))

    assert not is_constraint_violation(exc, CHECK_VIOLATION, REQUESTED_IN_FUTURE_CHECK)
