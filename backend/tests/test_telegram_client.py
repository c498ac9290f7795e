# backend/tests/test_telegram_client.py

import httpx
import pytest

from notifyhub.telegram.client import (
    TelegramAPIError,
    TelegramAuthError,
    TelegramClient,
    TelegramClientError,
    TelegramConnectionError,
)
from notifyhub.telegram.config import get_telegram_settings
from notifyhub.utils.config import EnvVarMissingError


def test_telegram_errors_are_client_errors():
    assert issubclass(TelegramAuthError, TelegramClientError)
    assert issubclass(TelegramAPIError, TelegramClientError)
    assert issubclass(TelegramConnectionError, TelegramClientError)


def test_get_me_success(monkeypatch):
    captured = {}

    def fake_post(url, **kwargs):
        captured["url"] = url
        captured["timeout"] = kwargs["timeout"]
        return httpx.Response(
            status_code=200,
            json={"ok": True, "result": {"id": 42, "username": "notify_bot"}},
        )

    monkeypatch.setattr(httpx, "post", fake_post)

    client = TelegramClient("123:abc", api_base_url="https://tg.example.com/", timeout=7)
    me = client.get_me()

    assert me["username"] == "notify_bot"
    assert captured["url"] == "https://tg.example.com/bot123:abc/getMe"
    assert captured["timeout"] == 7


def test_get_me_unauthorized(monkeypatch):
    def fake_post(*args, **kwargs):
        return httpx.Response(
            status_code=401,
            json={"ok": False, "error_code": 401, "description": "Unauthorized"},
        )

    monkeypatch.setattr(httpx, "post", fake_post)

    with pytest.raises(TelegramAuthError):
        TelegramClient("bad").get_me()


def test_send_message_payload_and_timeout_override(monkeypatch):
    captured = {}

    def fake_post(url, **kwargs):
        captured["url"] = url
        captured.update(kwargs)
        return httpx.Response(status_code=200, json={"ok": True, "result": {"message_id": 1}})

    monkeypatch.setattr(httpx, "post", fake_post)

    client = TelegramClient("123:abc")
    result = client.send_message(99, "hello", "HTML", timeout=1.5)

    assert result == {"message_id": 1}
    assert captured["url"].endswith("/bot123:abc/sendMessage")
    assert captured["json"] == {"chat_id": 99, "text": "hello", "parse_mode": "HTML"}
    assert captured["timeout"] == 1.5


def test_send_message_api_error(monkeypatch):
    def fake_post(*args, **kwargs):
        return httpx.Response(
            status_code=400,
            json={"ok": False, "error_code": 400, "description": "Bad Request: chat not found"},
        )

    monkeypatch.setattr(httpx, "post", fake_post)

    with pytest.raises(TelegramAPIError) as excinfo:
        TelegramClient("123:abc").send_message(1, "hello", "HTML")

    assert excinfo.value.status_code == 400
    assert "chat not found" in str(excinfo.value)


def test_send_message_ok_false_is_api_error(monkeypatch):
    def fake_post(*args, **kwargs):
        return httpx.Response(status_code=200, json={"ok": False, "description": "nope"})

    monkeypatch.setattr(httpx, "post", fake_post)

    with pytest.raises(TelegramAPIError):
        TelegramClient("123:abc").send_message(1, "hello", "HTML")


def test_network_error_does_not_leak_token(monkeypatch):
    def fake_post(*args, **kwargs):
        raise httpx.ConnectError("connection refused to https://api.telegram.org/bot123:secret/getMe")

    monkeypatch.setattr(httpx, "post", fake_post)

    with pytest.raises(TelegramConnectionError) as excinfo:
        TelegramClient("123:secret").get_me()

    assert "secret" not in str(excinfo.value)


def test_get_telegram_settings_requires_token():
    with pytest.raises(EnvVarMissingError):
        get_telegram_settings()


def test_get_telegram_settings_reads_env(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setenv("TELEGRAM_CHAT_IDS", "1,-1002")
    monkeypatch.setenv("TELEGRAM_TIMEOUT_SECONDS", "3")

    settings = get_telegram_settings()

    assert settings.api_token == "123:abc"
    assert settings.chat_ids == [1, -1002]
    assert settings.timeout_seconds == 3
    assert settings.parse_mode == "HTML"
    assert settings.api_base_url == "https://api.telegram.org"


def test_get_telegram_settings_rejects_non_integer_chat_ids(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setenv("TELEGRAM_CHAT_IDS", "1,general")

    with pytest.raises(ValueError):
        get_telegram_settings()
