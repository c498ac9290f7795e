# backend/notifyhub/__init__.py
"""
notifyhub: notification dispatch facade.

This package contains:
- notifications: dispatcher, sender protocol, send context, shared default instance
- telegram: Telegram Bot API sender
- webhook: generic JSON webhook sender
- utils: environment variable helpers
"""
