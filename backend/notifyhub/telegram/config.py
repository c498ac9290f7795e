# backend/notifyhub/telegram/config.py

"""
Telegram 連携に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass, field
from typing import List

from notifyhub.utils.config import get_env, get_env_int, get_env_list

DEFAULT_API_BASE_URL = "https://api.telegram.org"


@dataclass
class TelegramSettings:
    """
    Telegram Bot API 関連の設定値。
    """
    api_token: str = field(repr=False)
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: int = 10
    parse_mode: str = "HTML"
    chat_ids: List[int] = field(default_factory=list)


def _parse_chat_ids(raw_ids: List[str]) -> List[int]:
    try:
        return [int(raw) for raw in raw_ids]
    except ValueError as exc:
        raise ValueError(f"TELEGRAM_CHAT_IDS must be a comma separated list of integers: {exc}") from exc


def get_telegram_settings() -> TelegramSettings:
    """
    Telegram 設定値を環境変数から読み出す。

    必須:
      - TELEGRAM_BOT_TOKEN

    任意:
      - TELEGRAM_CHAT_IDS        （カンマ区切りのチャット ID）
      - TELEGRAM_PARSE_MODE      （HTML / Markdown、デフォルト HTML）
      - TELEGRAM_API_BASE_URL    （デフォルト https://api.telegram.org）
      - TELEGRAM_TIMEOUT_SECONDS （デフォルト 10秒）
    """
    api_token = get_env("TELEGRAM_BOT_TOKEN")

    return TelegramSettings(
        api_token=api_token,
        api_base_url=get_env(
            "TELEGRAM_API_BASE_URL",
            default=DEFAULT_API_BASE_URL,
            required=False,
        ),
        timeout_seconds=get_env_int("TELEGRAM_TIMEOUT_SECONDS", default=10),
        parse_mode=get_env("TELEGRAM_PARSE_MODE", default="HTML", required=False),
        chat_ids=_parse_chat_ids(get_env_list("TELEGRAM_CHAT_IDS")),
    )
