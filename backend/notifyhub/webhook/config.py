# backend/notifyhub/webhook/config.py

"""
Webhook 送信に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass, field
from typing import List, Optional

from notifyhub.utils.config import get_env, get_env_int, get_env_list


@dataclass
class WebhookSettings:
    """
    Webhook 送信関連の設定値。
    """
    urls: List[str] = field(default_factory=list)
    secret: Optional[str] = None
    timeout_seconds: int = 10


def get_webhook_settings() -> WebhookSettings:
    """
    Webhook 設定値を環境変数から読み出す。いずれも任意。

      - WEBHOOK_URLS            （カンマ区切りの送信先 URL）
      - WEBHOOK_SECRET          （HMAC-SHA256 署名用の共有シークレット）
      - WEBHOOK_TIMEOUT_SECONDS （デフォルト 10秒）
    """
    return WebhookSettings(
        urls=get_env_list("WEBHOOK_URLS"),
        secret=get_env("WEBHOOK_SECRET", default=None, required=False),
        timeout_seconds=get_env_int("WEBHOOK_TIMEOUT_SECONDS", default=10),
    )
