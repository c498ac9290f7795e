# backend/notifyhub/notifications/__init__.py

"""
通知ディスパッチ層のモジュール群。

呼び出し元は件名と本文を一度渡すだけで、登録済みの全 Sender
（Telegram / Webhook / ログ出力など）に順番に通知が送られる。

構成イメージ:
- context: キャンセル／期限トークン（SendContext）
- errors: 通知レイヤ共通の例外
- schemas: 通知リクエストの共通スキーマ
- service: Sender インターフェースとディスパッチャ
- config: ディスパッチャ本体の環境変数設定
- factory: プロセス共有のディスパッチャと環境変数からの組み立て

※ Sender 実装のサブパッケージがこのパッケージを import するため、
  ここでは何も import しないこと。
"""
