# backend/notifyhub/notifications/service.py

"""
通知送信インターフェースとディスパッチャ。

- send(ctx, subject, message) を持つ NotificationSender インターフェース
- ログ出力のみ行う LoggingNotificationSender
- 複数 Sender に順番にファンアウトする NotificationDispatcher

を提供する。Telegram / Webhook などの実送信ロジックは各サブパッケージ側に置く。

ファンアウトはフェイルファスト:
最初に失敗した Sender で打ち切り、その失敗だけを呼び出し元に返す。
後続の Sender が成功したかどうかは分からなくなるが、
「通知は全部届いたか、どこかで止まったか」の二択で扱いたい呼び出し元にはこの方が単純。
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Protocol, Tuple, runtime_checkable

from .context import SendContext
from .errors import ContextError, SendNotificationError
from .schemas import NotificationChannel, NotificationRequest

logger = logging.getLogger(__name__)


@runtime_checkable
class NotificationSender(Protocol):
    """
    通知送信の最小インターフェース。

    実装例:
    - LoggingNotificationSender: ログ出力のみ
    - TelegramNotificationSender: Telegram Bot API 経由で送信
    - WebhookNotificationSender: HTTP Webhook に POST
    - NotificationDispatcher: 同じシグネチャなので入れ子にできる

    失敗時は例外を投げる。キャンセル時は ContextError をそのまま投げること。
    """

    def send(self, ctx: SendContext, subject: str, message: str) -> None:  # pragma: no cover - Protocol
        ...


def describe_sender(sender: object) -> str:
    """診断用に Sender を識別する名前を返す。channel 属性がなければクラス名。"""
    channel = getattr(sender, "channel", None)
    if isinstance(channel, NotificationChannel):
        return channel.value
    if channel:
        return str(channel)
    return type(sender).__name__


class LoggingNotificationSender:
    """
    通知を Python の logger に記録するだけの Sender。

    - 実際の外部サービスへの送信は行わない
    - 宛先という概念はないので add_receivers は持たない
    """

    channel = NotificationChannel.INTERNAL_LOG

    def __init__(
        self,
        logger_: logging.Logger | None = None,
        level: int = logging.INFO,
    ) -> None:
        self._logger = logger_ or logger
        self._level = level

    def send(self, ctx: SendContext, subject: str, message: str) -> None:
        """
        通知を構築時に指定したログレベルで出力する。
        """
        ctx.raise_if_done()

        prefix = f"[{self.channel.value}] {subject} "
        self._logger.log(self._level, prefix + message)


Option = Callable[["NotificationDispatcher"], None]


def enable(dispatcher: Optional["NotificationDispatcher"]) -> None:
    """ディスパッチャを有効化するオプション。デフォルトは有効。"""
    if dispatcher is not None:
        dispatcher.enable()


def disable(dispatcher: Optional["NotificationDispatcher"]) -> None:
    """ディスパッチャを無効化するオプション。"""
    if dispatcher is not None:
        dispatcher.disable()


class NotificationDispatcher:
    """
    登録された NotificationSender に通知を順番にファンアウトするディスパッチャ。

    - 生成直後は有効・Sender なし。オプションは渡された順に適用され、最後のものが勝つ。
    - 無効化されている間の send() は何もせずに成功扱いで返る（グローバルなミュートスイッチ）。
    - 設定変更はロックで保護し、send() は開始時点の Sender 一覧のスナップショットを使う。
    """

    def __init__(self, *options: Optional[Option]) -> None:
        self._lock = threading.Lock()
        self._enabled = True
        self._senders: List[NotificationSender] = []
        self.with_options(*options)

    def __len__(self) -> int:
        with self._lock:
            return len(self._senders)

    def __repr__(self) -> str:
        return f"NotificationDispatcher(enabled={self.enabled}, senders={len(self)})"

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    @property
    def senders(self) -> Tuple[NotificationSender, ...]:
        with self._lock:
            return tuple(self._senders)

    def with_options(self, *options: Optional[Option]) -> "NotificationDispatcher":
        """
        オプションを順に適用し、同じインスタンスを返す（メソッドチェーン用）。

        None のオプションは無視する。
        """
        for option in options:
            if option is not None:
                option(self)
        return self

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    def register_senders(self, *senders: NotificationSender) -> None:
        """
        Sender を登録順を保ったまま末尾に追加する。

        同じ Sender を複数回登録することも許す（その回数だけ送信される）。
        """
        for sender in senders:
            if sender is None:
                raise TypeError("sender must not be None")

        with self._lock:
            self._senders.extend(senders)

    def send(self, ctx: SendContext, subject: str, message: str) -> None:
        """
        件名と本文を登録済みの全 Sender に登録順で送信する。

        :raises ContextError: ctx がキャンセル／期限切れになった場合（ラップしない）。
        :raises SendNotificationError: 最初に失敗した Sender の例外をラップしたもの。
        """
        with self._lock:
            if not self._enabled:
                logger.debug("Notification dispatcher is disabled. Skipping '%s'.", subject)
                return
            senders = list(self._senders)

        logger.debug("Dispatching '%s' to %d sender(s).", subject, len(senders))

        for position, sender in enumerate(senders, start=1):
            err = ctx.err()
            if err is not None:
                logger.warning(
                    "Notification dispatch stopped before sender #%d: %s", position, err
                )
                raise err

            try:
                sender.send(ctx, subject, message)
            except ContextError:
                raise
            except Exception as exc:
                name = describe_sender(sender)
                logger.warning("Notification sender #%d '%s' failed: %s", position, name, exc)
                raise SendNotificationError(name, position, str(exc)) from exc

    def send_request(self, ctx: SendContext, request: NotificationRequest) -> None:
        self.send(ctx, request.subject, request.message)
