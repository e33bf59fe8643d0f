"""Telegram transport using the Bot API over httpx."""

from typing import Any

import httpx
from loguru import logger

from pingwire.channels.base import BaseTransport
from pingwire.channels.errors import TransportError
from pingwire.config.schema import TelegramConfig
from pingwire.delivery.models import DeliveryCredentials, SendResult
from pingwire.utils.helpers import redact_secrets


def _escape_pre(text: str) -> str:
    """Escape text for a MarkdownV2 ``pre`` block (only ``\\`` and ``` ` ```)."""
    return text.replace("\\", "\\\\").replace("`", "\\`")


def format_code_block(text: str) -> str:
    """Wrap text in a MarkdownV2 fenced code block."""
    return f"```\n{_escape_pre(text)}\n```"


def _describe_failure(status_code: int, payload: Any) -> str:
    """Build the error text for a non-ok API response."""
    description = payload.get("description") if isinstance(payload, dict) else None
    if description:
        return f"Telegram API error: {description}"
    return f"HTTP {status_code}: Telegram API request failed"


class TelegramTransport(BaseTransport):
    """
    Sends one message per call to ``sendMessage``.

    Messages are rendered as a monospace code block so request dumps and
    arbitrary user text keep their layout without further escaping.
    """

    name = "telegram"

    def __init__(
        self,
        config: TelegramConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.config = config or TelegramConfig()
        self._client = client

    def _url(self, token: str) -> str:
        return f"{self.config.api_base.rstrip('/')}/bot{token}/sendMessage"

    async def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(url, json=payload, timeout=self.config.timeout)
        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            return await client.post(url, json=payload)

    async def _call(self, text: str, credentials: DeliveryCredentials) -> None:
        if not credentials.bot_token:
            raise TransportError("Telegram bot token not configured")
        if not credentials.chat_id:
            raise TransportError("Telegram chat ID not configured")

        payload = {
            "chat_id": credentials.chat_id,
            "text": format_code_block(text),
            "parse_mode": "MarkdownV2",
        }
        try:
            resp = await self._post(self._url(credentials.bot_token), payload)
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not resp.is_success or not isinstance(body, dict) or not body.get("ok"):
            raise TransportError(_describe_failure(resp.status_code, body))

    async def send_message(self, text: str, credentials: DeliveryCredentials) -> SendResult:
        """Send a message through Telegram."""
        try:
            await self._call(text, credentials)
        except TransportError as e:
            # httpx errors carry the request URL, which embeds the bot token.
            error = str(e)
            if credentials.bot_token:
                error = error.replace(credentials.bot_token, "***")
            error = redact_secrets(error)
            logger.warning(f"{self.name} send failed: {error}")
            return SendResult.failed(error)
        return SendResult.ok()
