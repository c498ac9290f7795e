# backend/tests/conftest.py
"""
Pytest configuration for notifyhub tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import notifyhub.*` works correctly in tests.
- Removes notification related environment variables so that
  a developer's local Telegram / webhook settings never leak into tests.
- Resets the process-wide dispatcher between tests.
"""

import sys
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


_ensure_project_root_in_sys_path()


_NOTIFY_ENV_VARS = (
    "NOTIFY_ENABLED",
    "NOTIFY_LOG_SENDER",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_CHAT_IDS",
    "TELEGRAM_PARSE_MODE",
    "TELEGRAM_API_BASE_URL",
    "TELEGRAM_TIMEOUT_SECONDS",
    "WEBHOOK_URLS",
    "WEBHOOK_SECRET",
    "WEBHOOK_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _isolate_notify_env(monkeypatch):
    for name in _NOTIFY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_default_dispatcher():
    from notifyhub.notifications.factory import reset_notification_dispatcher

    reset_notification_dispatcher()
    yield
    reset_notification_dispatcher()
