from __future__ import annotations

from datetime import time
from types import SimpleNamespace

import pytest

import config.testing as testing_settings
from attendance_scanner.core.enums import AbsencePolicy, StoreBackend
from attendance_scanner.core.exceptions import ValidationError
from attendance_scanner.core.settings import ScannerSettings


def test_from_testing_module():
    s = ScannerSettings.from_module(testing_settings)

    assert s.store_backend == StoreBackend.MEMORY
    assert s.present_before == time(8, 15)
    assert s.late_before == time(16, 0)
    assert s.absence_policy == AbsencePolicy.EXPLICIT
    assert s.timezone.key == "UTC"
    assert s.lookup_timeout == 2.0


def test_defaults_for_missing_keys():
    s = ScannerSettings.from_module(SimpleNamespace())

    assert s.store_backend == StoreBackend.MYSQL
    assert s.present_before == time(8, 15)


def test_blank_timeout_disables_it():
    s = ScannerSettings.from_module(SimpleNamespace(STORE_TIMEOUT_SECONDS=""))

    assert s.store_timeout is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"STORE_BACKEND": "sqlite"},
        {"ABSENCE_POLICY": "sometimes"},
        {"TIMEZONE": "Mars/Olympus_Mons"},
        {"PRESENT_BEFORE": "8h15"},
        {"LOOKUP_TIMEOUT_SECONDS": "-1"},
        {"STORE_TIMEOUT_SECONDS": "soon"},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        ScannerSettings.from_module(SimpleNamespace(**overrides))


def test_env_selects_settings_module(monkeypatch):
    from config import get_settings_module

    monkeypatch.delenv("SCANNER_SETTINGS", raising=False)
    monkeypatch.setenv("APP_ENV", "testing")
    assert get_settings_module() == "config.testing"


def test_explicit_settings_module_wins(monkeypatch):
    from config import get_settings_module

    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SCANNER_SETTINGS", "config.testing")
    assert get_settings_module() == "config.testing"


def test_unknown_env_falls_back_to_development(monkeypatch):
    from config import get_settings_module

    monkeypatch.delenv("SCANNER_SETTINGS", raising=False)
    monkeypatch.setenv("APP_ENV", "staging")
    assert get_settings_module() == "config.development"
