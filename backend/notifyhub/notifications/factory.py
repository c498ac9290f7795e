# backend/notifyhub/notifications/factory.py

"""
通知ディスパッチャのファクトリ。

- プロセス全体で共有するデフォルトのディスパッチャ（有効・Sender なし）
- 環境変数の設定から Sender を組み立てたディスパッチャ

の 2 通りの入手方法を提供する。
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from notifyhub.telegram.config import get_telegram_settings
from notifyhub.telegram.service import create_telegram_sender_from_settings
from notifyhub.utils.config import get_env
from notifyhub.webhook.config import get_webhook_settings
from notifyhub.webhook.service import create_webhook_sender_from_settings

from .config import get_dispatcher_settings
from .context import SendContext
from .service import LoggingNotificationSender, NotificationDispatcher, disable

logger = logging.getLogger(__name__)

_notification_dispatcher: Optional[NotificationDispatcher] = None
_lock = threading.Lock()


def get_notification_dispatcher() -> NotificationDispatcher:
    """
    アプリ全体で共有する NotificationDispatcher を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    ここで登録した Sender や有効／無効の切り替えはプロセス全体から見える。
    """
    global _notification_dispatcher
    if _notification_dispatcher is None:
        with _lock:
            if _notification_dispatcher is None:
                _notification_dispatcher = NotificationDispatcher()
    return _notification_dispatcher


def reset_notification_dispatcher() -> None:
    """共有ディスパッチャを破棄する（テスト用）。"""
    global _notification_dispatcher
    with _lock:
        _notification_dispatcher = None


def send(ctx: SendContext, subject: str, message: str) -> None:
    """共有ディスパッチャ経由で通知を送る。"""
    get_notification_dispatcher().send(ctx, subject, message)


def build_dispatcher_from_env() -> NotificationDispatcher:
    """
    環境変数から新しいディスパッチャを組み立てる。共有ディスパッチャには触らない。

    登録順:
    1. ログ出力 Sender（NOTIFY_LOG_SENDER=true の場合）
    2. Telegram Sender（TELEGRAM_BOT_TOKEN が設定されている場合）
    3. Webhook Sender（WEBHOOK_URLS が設定されている場合）

    :raises SenderConstructionError: Telegram トークンの検証に失敗した場合。
    """
    settings = get_dispatcher_settings()
    dispatcher = NotificationDispatcher(None if settings.enabled else disable)

    if settings.log_sender:
        dispatcher.register_senders(LoggingNotificationSender())

    if get_env("TELEGRAM_BOT_TOKEN", required=False):
        dispatcher.register_senders(create_telegram_sender_from_settings(get_telegram_settings()))

    webhook_settings = get_webhook_settings()
    if webhook_settings.urls:
        dispatcher.register_senders(create_webhook_sender_from_settings(webhook_settings))

    logger.info("Built notification dispatcher from environment: %r", dispatcher)
    return dispatcher
