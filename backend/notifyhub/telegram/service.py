# backend/notifyhub/telegram/service.py

"""
Telegram Bot API 経由で通知を送る Sender。

構築時に Bot トークンを getMe で検証し、失敗したら Sender を返さずに例外を投げる。
宛先のチャット ID は add_receivers() で事前に登録しておき、
send() はそれらに登録順で 1 通ずつ送る。
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional

from notifyhub.notifications.context import SendContext
from notifyhub.notifications.errors import DeliveryError, SenderConstructionError
from notifyhub.notifications.schemas import NotificationChannel, render_text

from .client import TelegramClient, TelegramClientError
from .config import TelegramSettings

logger = logging.getLogger(__name__)


class ParseMode(str, Enum):
    """メッセージ本文の解釈方法。"""

    HTML = "HTML"
    MARKDOWN = "Markdown"


def parse_parse_mode(raw: str) -> ParseMode:
    """
    文字列から ParseMode を得る。大文字小文字は区別しない。

    :raises ValueError: HTML / Markdown のいずれでもない場合。
    """
    for mode in ParseMode:
        if mode.value.lower() == raw.strip().lower():
            return mode
    raise ValueError(
        f"unknown parse mode '{raw}', expected one of: {', '.join(m.value for m in ParseMode)}"
    )


class TelegramNotificationSender:
    """
    Telegram の複数チャットに通知を送る Sender。
    """

    channel = NotificationChannel.TELEGRAM

    def __init__(self, client: TelegramClient, parse_mode: ParseMode = ParseMode.HTML) -> None:
        self._client = client
        self._parse_mode = parse_mode
        self._chat_ids: List[int] = []

    @property
    def parse_mode(self) -> ParseMode:
        return self._parse_mode

    @property
    def chat_ids(self) -> List[int]:
        return list(self._chat_ids)

    def add_receivers(self, *chat_ids: int) -> None:
        """
        チャット ID を内部リストに追加する。send() はこれら全てに送信する。
        """
        self._chat_ids.extend(chat_ids)

    def send(self, ctx: SendContext, subject: str, message: str) -> None:
        """
        件名をタイトル行として本文と連結し、登録済みの全チャットに送る。
        """
        text = render_text(subject, message)

        for chat_id in list(self._chat_ids):
            ctx.raise_if_done()

            timeout = ctx.remaining()
            if timeout is not None:
                timeout = min(timeout, self._client.timeout)

            logger.debug("Sending Telegram message to chat %s.", chat_id)
            try:
                self._client.send_message(
                    chat_id,
                    text,
                    self._parse_mode.value,
                    timeout=timeout,
                )
            except TelegramClientError as exc:
                err = ctx.err()
                if err is not None:
                    raise err from exc
                raise DeliveryError(self.channel.value, chat_id, str(exc)) from exc


SenderOption = Callable[[TelegramNotificationSender], None]


def with_parse_mode(parse_mode: ParseMode) -> SenderOption:
    """メッセージの ParseMode を設定するオプション。デフォルトは HTML。"""

    def _apply(sender: TelegramNotificationSender) -> None:
        sender._parse_mode = ParseMode(parse_mode)

    return _apply


def create_telegram_sender(
    api_token: str,
    *options: SenderOption,
    settings: Optional[TelegramSettings] = None,
) -> TelegramNotificationSender:
    """
    Telegram Sender を生成する。

    :param api_token: BotFather で発行された Bot トークン。
    :param settings: API のベース URL やタイムアウトを上書きしたい場合に指定する。
    :raises SenderConstructionError: トークンの検証に失敗した場合。
    """
    settings = settings or TelegramSettings(api_token=api_token)
    client = TelegramClient(
        api_token,
        api_base_url=settings.api_base_url,
        timeout=settings.timeout_seconds,
    )

    try:
        me = client.get_me()
    except TelegramClientError as exc:
        raise SenderConstructionError(f"failed to create Telegram sender: {exc}") from exc

    logger.info("Telegram sender authorized as '%s'.", me.get("username", "unknown"))

    sender = TelegramNotificationSender(client)
    for option in options:
        option(sender)
    return sender


def create_telegram_sender_from_settings(settings: TelegramSettings) -> TelegramNotificationSender:
    """
    環境変数由来の設定から Sender を生成し、設定済みのチャット ID を登録する。

    :raises SenderConstructionError: TELEGRAM_PARSE_MODE が不正、またはトークンの検証に失敗した場合。
    """
    try:
        parse_mode = parse_parse_mode(settings.parse_mode)
    except ValueError as exc:
        raise SenderConstructionError(
            f"failed to create Telegram sender: invalid TELEGRAM_PARSE_MODE: {exc}"
        ) from exc

    sender = create_telegram_sender(
        settings.api_token,
        with_parse_mode(parse_mode),
        settings=settings,
    )
    sender.add_receivers(*settings.chat_ids)
    return sender
