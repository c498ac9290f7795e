# backend/notifyhub/webhook/client.py

"""
任意の HTTP Webhook に JSON を POST するクライアント。
"""

import hashlib
import hmac
import json
from typing import Any, Dict, Optional

import httpx

SIGNATURE_HEADER = "X-Notify-Signature"


class WebhookClientError(Exception):
    """Webhook クライアント全般の基底例外。"""


class WebhookHTTPError(WebhookClientError):
    """HTTP ステータスコードがエラーだった場合の例外。"""

    def __init__(self, status_code: int, body: Any | None = None) -> None:
        super().__init__(f"Webhook error: status_code={status_code}")
        self.status_code = status_code
        self.body = body


class WebhookConnectionError(WebhookClientError):
    """接続エラー・タイムアウト時の例外。"""


def sign_body(secret: str, body: str) -> str:
    digest = hmac.new(secret.encode(), body.encode(), hashlib.sha256).hexdigest()
    return f"sha256={digest}"


class WebhookClient:
    """
    Webhook への HTTP クライアント。

    secret が設定されている場合は本文の HMAC-SHA256 署名をヘッダに付与する。
    """

    def __init__(self, secret: Optional[str] = None, timeout: float = 10.0) -> None:
        self._secret = secret
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    def _build_headers(self, body: str) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._secret:
            headers[SIGNATURE_HEADER] = sign_body(self._secret, body)
        return headers

    def post(
        self,
        url: str,
        payload: Dict[str, Any],
        *,
        timeout: Optional[float] = None,
    ) -> None:
        """
        payload を JSON として url に POST する。

        :raises WebhookHTTPError: 2xx 以外が返った場合。
        :raises WebhookConnectionError: 接続エラーやタイムアウト時。
        """
        body = json.dumps(payload)

        try:
            response = httpx.post(
                url,
                content=body,
                headers=self._build_headers(body),
                timeout=self._timeout if timeout is None else timeout,
            )
        except httpx.RequestError as exc:
            raise WebhookConnectionError(str(exc)) from exc

        if response.status_code // 100 != 2:
            raise WebhookHTTPError(status_code=response.status_code, body=response.text)
