# backend/notifyhub/notifications/schemas.py

"""
通知メッセージの共通スキーマ定義。

- 通知のチャンネル種別（どこに送るか）
- 件名＋本文

のみを扱い、実際の送信先（チャット ID や URL など）は各 Sender 実装側に持たせる。

※ セキュリティ上の観点から、NotificationRequest 自体には
  Bot トークンや Webhook シークレットなどの機密情報は含めないこと。
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class NotificationChannel(str, Enum):
    """
    通知の論理的なチャンネル種別。

    - INTERNAL_LOG: アプリ内部ログ
    - TELEGRAM: Telegram Bot API
    - WEBHOOK: 任意の HTTP Webhook
    """

    INTERNAL_LOG = "internal_log"
    TELEGRAM = "telegram"
    WEBHOOK = "webhook"


class NotificationRequest(BaseModel):
    """
    通知 1件分の情報。送信のたびに生成され、保存はしない。

    message はプレーンテキスト想定（Telegram の場合は ParseMode に従って解釈される）。
    """

    subject: str = Field(
        ...,
        description="短い件名（チャットの1行目など）。",
    )
    message: str = Field(
        ...,
        description="本文。",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="通知生成時刻（UTC）。",
    )


def render_text(subject: str, message: str) -> str:
    """件名を先頭行として本文と連結する。"""
    return subject + "\n" + message
