# backend/notifyhub/webhook/service.py

"""
Webhook へ通知を JSON で POST する Sender。
"""

from __future__ import annotations

import logging
from typing import List

from notifyhub.notifications.context import SendContext
from notifyhub.notifications.errors import DeliveryError
from notifyhub.notifications.schemas import NotificationChannel, NotificationRequest

from .client import WebhookClient, WebhookClientError
from .config import WebhookSettings

logger = logging.getLogger(__name__)


class WebhookNotificationSender:
    """
    登録済みの Webhook URL に通知を JSON で POST する Sender。

    送信内容は {"subject", "message", "created_at"}。件名と本文は連結せずに別フィールドで送る。
    """

    channel = NotificationChannel.WEBHOOK

    def __init__(self, client: WebhookClient | None = None) -> None:
        self._client = client or WebhookClient()
        self._urls: List[str] = []

    @property
    def urls(self) -> List[str]:
        return list(self._urls)

    def add_receivers(self, *urls: str) -> None:
        self._urls.extend(urls)

    def send(self, ctx: SendContext, subject: str, message: str) -> None:
        payload = NotificationRequest(subject=subject, message=message).model_dump(mode="json")

        for url in list(self._urls):
            ctx.raise_if_done()

            timeout = ctx.remaining()
            if timeout is not None:
                timeout = min(timeout, self._client.timeout)

            logger.debug("Posting notification to webhook %s.", url)
            try:
                self._client.post(url, payload, timeout=timeout)
            except WebhookClientError as exc:
                err = ctx.err()
                if err is not None:
                    raise err from exc
                raise DeliveryError(self.channel.value, url, str(exc)) from exc


def create_webhook_sender_from_settings(settings: WebhookSettings) -> WebhookNotificationSender:
    client = WebhookClient(secret=settings.secret, timeout=settings.timeout_seconds)
    sender = WebhookNotificationSender(client)
    sender.add_receivers(*settings.urls)
    return sender
