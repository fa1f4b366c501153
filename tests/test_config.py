"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from dose_taper.config import Settings, get_settings, reset_settings
from dose_taper.models.result import Mode, ReductionMethod

ENV_VARS = (
    "DOSE_TAPER_LOG_LEVEL",
    "DOSE_TAPER_DEFAULT_MODE",
    "DOSE_TAPER_DEFAULT_METHOD",
    "DOSE_TAPER_PERCENTAGE_RATE",
    "DOSE_TAPER_REPORT_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


def test_defaults():
    settings = get_settings()
    assert settings.log_level == "WARNING"
    assert settings.default_mode == Mode.CLINICAL
    assert settings.default_method == ReductionMethod.ABSOLUTE
    assert settings.percentage_rate == 10
    assert settings.report_dir == "reports"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DOSE_TAPER_LOG_LEVEL", "debug")
    monkeypatch.setenv("DOSE_TAPER_DEFAULT_MODE", "patient")
    monkeypatch.setenv("DOSE_TAPER_DEFAULT_METHOD", "percentage")
    monkeypatch.setenv("DOSE_TAPER_PERCENTAGE_RATE", "25")
    settings = get_settings()
    assert settings.log_level == "DEBUG"
    assert settings.default_mode == Mode.PATIENT
    assert settings.default_method == ReductionMethod.PERCENTAGE
    assert settings.percentage_rate == 25


def test_settings_are_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("DOSE_TAPER_DEFAULT_MODE", "patient")
    assert get_settings() is first
    reset_settings()
    assert get_settings().default_mode == Mode.PATIENT


def test_invalid_rate_is_rejected(monkeypatch):
    monkeypatch.setenv("DOSE_TAPER_PERCENTAGE_RATE", "150")
    with pytest.raises(ValidationError):
        Settings.from_env()
