from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_default_secret_key_allowed_in_development() -> None:
    settings = Settings(_env_file=None, app_env="development", secret_key="change-me")
    assert settings.secret_key == "change-me"


def test_default_secret_key_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, app_env="production", secret_key="change-me")


def test_placeholder_secret_key_prefix_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, app_env="prod", secret_key="change-me-in-production")


def test_custom_secret_key_allowed_in_production() -> None:
    settings = Settings(_env_file=None, app_env="production", secret_key="super-secure-value")
    assert settings.secret_key == "super-secure-value"


def test_working_hours_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.working_hours_start == 9
    assert settings.working_hours_end == 18
    assert settings.working_hours_timezone == "UTC"
    assert settings.working_weekdays == (0, 1, 2, 3, 4)
    assert settings.availability_default_window_days == 14


def test_working_hours_must_be_ordered() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, working_hours_start=18, working_hours_end=9)


def test_working_weekdays_parsed_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORKING_WEEKDAYS", "4, 0,2,2")

    settings = Settings(_env_file=None)

    assert settings.working_weekdays == (0, 2, 4)


@pytest.mark.parametrize("weekdays", ["", "0,7", "-1"])
def test_invalid_working_weekdays_rejected(weekdays: str) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, working_weekdays=weekdays)


def test_unknown_timezone_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, working_hours_timezone="Mars/Olympus_Mons")


def test_default_availability_window_must_fit_max_window() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, availability_default_window_days=30, availability_max_window_days=14)


def test_max_availability_window_default() -> None:
    assert Settings(_env_file=None).availability_max_window_days == 62
