# backend/notifyhub/telegram/client.py

"""
Telegram Bot API との通信を担当するクライアントモジュール。
"""

from typing import Any, Dict, Optional

import httpx

from .config import DEFAULT_API_BASE_URL


class TelegramClientError(RuntimeError):
    """Telegram クライアント全般の例外。"""


class TelegramAuthError(TelegramClientError):
    """Bot トークンが無効な場合のエラー。"""


class TelegramAPIError(TelegramClientError):
    """その他 Telegram API 呼び出し時のエラー。"""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TelegramConnectionError(TelegramClientError):
    """接続エラー・タイムアウト時の例外。"""


class TelegramClient:
    """
    Telegram Bot API の薄いラッパークライアント。

    - getMe によるトークン検証
    - sendMessage によるテキスト送信
    """

    def __init__(
        self,
        api_token: str,
        *,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        self._api_token = api_token
        self._api_base_url = api_base_url.rstrip("/")
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    def _method_url(self, method: str) -> str:
        return f"{self._api_base_url}/bot{self._api_token}/{method}"

    def _raise_for_status(self, response: httpx.Response) -> Dict[str, Any]:
        """
        HTTP レスポンスコードと ok フラグに応じて適切な例外を投げる。
        成功時はレスポンスの JSON を返す。
        """
        # 無効なトークンには 401、存在しない Bot には 404 が返る
        if response.status_code in (401, 404):
            raise TelegramAuthError("Unauthorized. Check TELEGRAM_BOT_TOKEN.")

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code >= 400 or not isinstance(data, dict) or not data.get("ok"):
            description = data.get("description") if isinstance(data, dict) else response.text
            raise TelegramAPIError(
                f"Telegram API error: {response.status_code} {description}",
                status_code=response.status_code,
            )

        return data

    def _call(self, method: str, payload: Dict[str, Any], timeout: Optional[float]) -> Any:
        try:
            response = httpx.post(
                self._method_url(method),
                json=payload,
                timeout=self._timeout if timeout is None else timeout,
            )
        except httpx.RequestError as exc:
            # URL にトークンが含まれるため、例外メッセージは種別だけに留める
            raise TelegramConnectionError(
                f"Failed to call Telegram API method '{method}': {type(exc).__name__}"
            ) from exc

        return self._raise_for_status(response).get("result")

    def get_me(self) -> Dict[str, Any]:
        """
        Bot 自身の情報を取得する。トークンの検証に使う。
        """
        result = self._call("getMe", {}, timeout=None)
        if not isinstance(result, dict):
            raise TelegramAPIError("Unexpected Telegram API response format: 'result' is not an object.")
        return result

    def send_message(
        self,
        chat_id: int,
        text: str,
        parse_mode: str,
        *,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        1 チャットにテキストメッセージを送信する。

        :param timeout: 指定時はクライアント既定のタイムアウトの代わりに使う。
        :raises TelegramClientError: 送信に失敗した場合。
        """
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": parse_mode,
        }
        return self._call("sendMessage", payload, timeout=timeout)
