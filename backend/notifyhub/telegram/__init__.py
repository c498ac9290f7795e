"""
Telegram Bot API 連携モジュール群。

構成:
- config: 環境変数からの設定読み込み
- client: Bot API の HTTP クライアント
- service: NotificationSender 実装（TelegramNotificationSender）
"""
