"""Tests for the Telegram Bot API transport."""

from __future__ import annotations

import json

import httpx
import pytest
from loguru import logger

from pingwire.channels.telegram import TelegramTransport, format_code_block
from pingwire.config.schema import TelegramConfig
from pingwire.delivery.models import DeliveryCredentials
from pingwire.utils.helpers import redact_secrets

TOKEN = "123456789:AAHdqTcvCH1vGWJxfSeofSAs0K5PALDsaw"
CREDS = DeliveryCredentials(bot_token=TOKEN, chat_id="-100200300")


def _transport(handler) -> tuple[TelegramTransport, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TelegramTransport(TelegramConfig(), client=client), client


def test_format_code_block_escapes_backslash_and_backtick() -> None:
    assert format_code_block("plain") == "```\nplain\n```"
    assert format_code_block("a`b\\c") == "```\na\\`b\\\\c\n```"


def test_redact_secrets_hides_bot_token_in_url() -> None:
    text = f"Connection failed for https://api.telegram.org/bot{TOKEN}/sendMessage"
    redacted = redact_secrets(text)
    assert TOKEN not in redacted
    assert "https://api.telegram.org/bot***REDACTED***/sendMessage" in redacted


@pytest.mark.asyncio
async def test_send_posts_code_block_to_send_message() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True, "result": {"message_id": 1}})

    transport, client = _transport(handler)
    async with client:
        result = await transport.send_message("Part 1/2:\n\nhello", CREDS)

    assert result.success is True
    assert result.error is None
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == f"/bot{TOKEN}/sendMessage"
    payload = json.loads(request.content)
    assert payload == {
        "chat_id": "-100200300",
        "text": "```\nPart 1/2:\n\nhello\n```",
        "parse_mode": "MarkdownV2",
    }


@pytest.mark.asyncio
async def test_api_description_is_reported() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"ok": False, "description": "Bad Request: chat not found"})

    transport, client = _transport(handler)
    async with client:
        result = await transport.send_message("hello", CREDS)

    assert result.success is False
    assert result.error == "Telegram API error: Bad Request: chat not found"


@pytest.mark.asyncio
async def test_non_json_error_reports_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    transport, client = _transport(handler)
    async with client:
        result = await transport.send_message("hello", CREDS)

    assert result.success is False
    assert result.error == "HTTP 502: Telegram API request failed"


@pytest.mark.asyncio
async def test_ok_false_without_description_is_a_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"ok": False})

    transport, client = _transport(handler)
    async with client:
        result = await transport.send_message("hello", CREDS)

    assert result.success is False
    assert result.error == "HTTP 200: Telegram API request failed"


@pytest.mark.asyncio
async def test_network_error_is_returned_without_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(f"All connection attempts failed for {request.url}", request=request)

    transport, client = _transport(handler)
    async with client:
        result = await transport.send_message("hello", CREDS)

    assert result.success is False
    assert "All connection attempts failed" in result.error
    assert TOKEN not in result.error


@pytest.mark.asyncio
async def test_missing_credentials_fail_without_request() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"ok": True})

    transport, client = _transport(handler)
    async with client:
        no_token = await transport.send_message("hello", DeliveryCredentials(bot_token="", chat_id="1"))
        no_chat = await transport.send_message("hello", DeliveryCredentials(bot_token=TOKEN, chat_id=""))

    assert no_token.error == "Telegram bot token not configured"
    assert no_chat.error == "Telegram chat ID not configured"
    assert calls == []


@pytest.mark.asyncio
async def test_custom_api_base_is_used() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    transport = TelegramTransport(TelegramConfig(api_base="http://localhost:8081/"), client=client)
    async with client:
        result = await transport.send_message("hello", CREDS)

    assert result.success is True
    assert str(seen[0].url) == f"http://localhost:8081/bot{TOKEN}/sendMessage"


@pytest.mark.asyncio
async def test_failure_log_names_transport_not_destination() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"ok": False, "description": "Bad Request: chat not found"})

    lines: list[str] = []
    sink_id = logger.add(lines.append, level="DEBUG", format="{message}")
    transport, client = _transport(handler)
    try:
        async with client:
            result = await transport.send_message("hello", CREDS)
    finally:
        logger.remove(sink_id)

    assert result.success is False
    assert any(line.startswith("telegram send failed:") for line in lines)
    assert not any("-100200300" in line or TOKEN in line for line in lines)
