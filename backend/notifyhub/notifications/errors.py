# backend/notifyhub/notifications/errors.py

"""
通知レイヤ共通の例外定義。

- 構築エラー: Sender が作れなかった（トークン不正など）
- キャンセル: SendContext がキャンセル／期限切れになった
- 配送エラー: 特定の宛先への送信に失敗した
- ディスパッチエラー: ディスパッチャが最初に失敗した Sender を報告する

キャンセル系（ContextError）はどの階層でもラップせずにそのまま伝播させる。
"""

from __future__ import annotations

from typing import Any


class NotificationError(Exception):
    """通知レイヤ全般の基底例外。"""


class SenderConstructionError(NotificationError):
    """Sender の生成に失敗した場合の例外。"""


class ContextError(NotificationError):
    """SendContext が終了済みであることを表す例外の基底。"""


class ContextCancelled(ContextError):
    """SendContext が明示的にキャンセルされた。"""

    def __init__(self, message: str = "context canceled") -> None:
        super().__init__(message)


class DeadlineExceeded(ContextError):
    """SendContext の期限が過ぎた。"""

    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)


class DeliveryError(NotificationError):
    """
    1 宛先への送信失敗。

    どのチャンネルのどの宛先で失敗したかを保持する。元の例外は __cause__ に入る。
    """

    def __init__(self, channel: str, receiver: Any, reason: str) -> None:
        super().__init__(
            f"failed to send message to {channel} '{receiver}': {reason}"
        )
        self.channel = channel
        self.receiver = receiver


class SendNotificationError(NotificationError):
    """ディスパッチャが最初に失敗した Sender を報告する例外。"""

    def __init__(self, sender_name: str, position: int, reason: str) -> None:
        super().__init__(
            f"send notification: sender #{position} '{sender_name}' failed: {reason}"
        )
        self.sender_name = sender_name
        self.position = position
