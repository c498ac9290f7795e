"""
汎用 HTTP Webhook 連携モジュール群。
"""
