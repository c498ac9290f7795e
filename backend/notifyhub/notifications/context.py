# backend/notifyhub/notifications/context.py

"""
送信処理全体に引き回すキャンセル／期限トークン。

ディスパッチャ → Sender → 宛先ごとの送信、のすべての階層で
次の単位の処理を始める前に raise_if_done() を呼ぶ（協調的キャンセル）。
送信中の HTTP 呼び出しを中断することはしないが、remaining() で
リクエストのタイムアウトを期限内に収めることはできる。
"""

from __future__ import annotations

import threading
import time
from typing import Optional

from .errors import ContextCancelled, ContextError, DeadlineExceeded


class SendContext:
    """
    キャンセル可能で、任意に期限を持つコンテキスト。

    子コンテキストは親がキャンセルされると同時にキャンセル扱いになり、
    期限は親と自身のうち早い方を引き継ぐ。子のキャンセルは親に影響しない。
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        parent: Optional["SendContext"] = None,
    ) -> None:
        self._parent = parent
        self._cancelled = threading.Event()

        deadline: Optional[float] = None
        if timeout is not None:
            deadline = time.monotonic() + timeout
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline

    def __enter__(self) -> "SendContext":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()

    @property
    def deadline(self) -> Optional[float]:
        """time.monotonic() 基準の期限。期限なしなら None。"""
        return self._deadline

    def cancel(self) -> None:
        self._cancelled.set()

    def with_cancel(self) -> "SendContext":
        return SendContext(parent=self)

    def with_timeout(self, seconds: float) -> "SendContext":
        return SendContext(timeout=seconds, parent=self)

    def _is_cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self._parent is not None and self._parent._is_cancelled()

    def err(self) -> Optional[ContextError]:
        """
        終了理由を返す。まだ有効なら None。

        キャンセルと期限切れが両方成立している場合はキャンセルを優先する。
        """
        if self._is_cancelled():
            return ContextCancelled()
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceeded()
        return None

    def done(self) -> bool:
        return self.err() is not None

    def raise_if_done(self) -> None:
        err = self.err()
        if err is not None:
            raise err

    def remaining(self) -> Optional[float]:
        """期限までの残り秒数（0 未満にはならない）。期限なしなら None。"""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())


def background() -> SendContext:
    """キャンセルも期限もないルートコンテキストを返す。"""
    return SendContext()
