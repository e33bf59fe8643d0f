from __future__ import annotations

from typer.testing import CliRunner

from pingwire import __version__
from pingwire.channels import telegram as telegram_module
from pingwire.channels.base import BaseTransport
from pingwire.cli import commands
from pingwire.cli.commands import app
from pingwire.config import loader
from pingwire.config.schema import Config, DeliveryConfig, TelegramConfig
from pingwire.delivery.models import DeliveryCredentials, SendResult

runner = CliRunner()


class _FakeTelegram(BaseTransport):
    sent: list[str] = []
    error: str | None = None

    def __init__(self, config=None, client=None) -> None:  # type: ignore[no-untyped-def]
        pass

    async def send_message(self, text: str, credentials: DeliveryCredentials) -> SendResult:
        type(self).sent.append(text)
        if type(self).error:
            return SendResult.failed(type(self).error)
        return SendResult.ok()


def _patch(monkeypatch, error: str | None = None) -> type[_FakeTelegram]:
    fake = type("FakeTelegram", (_FakeTelegram,), {"sent": [], "error": error})
    config = Config(
        telegram=TelegramConfig(bot_token="123:abc", chat_id="42"),
        delivery=DeliveryConfig(chunk_delay=0),
    )
    monkeypatch.setattr(loader, "load_config", lambda *a, **kw: config)
    monkeypatch.setattr(telegram_module, "TelegramTransport", fake)
    monkeypatch.setattr(commands, "_configure_logging", lambda verbose: None)
    return fake


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_send_reports_parts(monkeypatch) -> None:
    fake = _patch(monkeypatch)

    result = runner.invoke(app, ["send", "backup completed"])

    assert result.exit_code == 0
    assert "Sent 1 part(s)" in result.output
    assert fake.sent == ["backup completed"]


def test_send_reads_stdin(monkeypatch) -> None:
    fake = _patch(monkeypatch)

    result = runner.invoke(app, ["send", "-"], input="from a pipe\n")

    assert result.exit_code == 0
    assert fake.sent == ["from a pipe"]


def test_send_exits_nonzero_on_failure(monkeypatch) -> None:
    _patch(monkeypatch, error="Telegram API error: Forbidden: bot was blocked by the user")

    result = runner.invoke(app, ["send", "hello"])

    assert result.exit_code == 1
    assert "bot was blocked" in result.output
