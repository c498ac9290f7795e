# backend/notifyhub/notifications/config.py

"""
ディスパッチャ本体（有効／無効、ログ出力 Sender の有無）の設定値をまとめるモジュール。
"""

from dataclasses import dataclass

from notifyhub.utils.config import get_env_bool


@dataclass(frozen=True)
class DispatcherSettings:
    """ディスパッチャ本体の設定値。"""

    enabled: bool = True
    log_sender: bool = False


def get_dispatcher_settings() -> DispatcherSettings:
    """
    環境変数からディスパッチャ設定を読み込む。いずれも任意。

      - NOTIFY_ENABLED    （デフォルト true。false なら send() は何もしない）
      - NOTIFY_LOG_SENDER （デフォルト false。true ならログ出力 Sender を先頭に登録）
    """
    return DispatcherSettings(
        enabled=get_env_bool("NOTIFY_ENABLED", default=True),
        log_sender=get_env_bool("NOTIFY_LOG_SENDER", default=False),
    )
