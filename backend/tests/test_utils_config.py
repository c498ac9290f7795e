# backend/tests/test_utils_config.py

import pytest

from notifyhub.notifications.config import get_dispatcher_settings
from notifyhub.utils.config import (
    EnvVarMissingError,
    get_env,
    get_env_bool,
    get_env_int,
    get_env_list,
)


def test_get_env_required_missing(monkeypatch):
    monkeypatch.delenv("NOTIFYHUB_TEST_VAR", raising=False)

    with pytest.raises(EnvVarMissingError) as excinfo:
        get_env("NOTIFYHUB_TEST_VAR")

    assert excinfo.value.name == "NOTIFYHUB_TEST_VAR"


def test_get_env_empty_string_uses_default(monkeypatch):
    monkeypatch.setenv("NOTIFYHUB_TEST_VAR", "")

    assert get_env("NOTIFYHUB_TEST_VAR", default="fallback", required=False) == "fallback"


def test_get_env_int_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("NOTIFYHUB_TEST_INT", "ten")
    assert get_env_int("NOTIFYHUB_TEST_INT", default=10) == 10

    monkeypatch.setenv("NOTIFYHUB_TEST_INT", "3")
    assert get_env_int("NOTIFYHUB_TEST_INT", default=10) == 3


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("TRUE", True), ("on", True), ("0", False), ("No", False), ("maybe", True)],
)
def test_get_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("NOTIFYHUB_TEST_BOOL", raw)

    assert get_env_bool("NOTIFYHUB_TEST_BOOL", default=True) is expected


def test_get_env_list_skips_empty_items(monkeypatch):
    monkeypatch.setenv("NOTIFYHUB_TEST_LIST", " a, ,b,, c ")

    assert get_env_list("NOTIFYHUB_TEST_LIST") == ["a", "b", "c"]


def test_dispatcher_settings_defaults():
    settings = get_dispatcher_settings()

    assert settings.enabled is True
    assert settings.log_sender is False
