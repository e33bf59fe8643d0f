"""CLI commands for pingwire."""

import asyncio
import sys

import typer
from rich.console import Console

from pingwire import __logo__, __version__

app = typer.Typer(
    name="pingwire",
    help=f"{__logo__} pingwire - HTTP-triggered Telegram notifier",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} pingwire v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """pingwire - HTTP-triggered Telegram notifier."""
    pass


def _configure_logging(verbose: bool) -> None:
    from loguru import logger

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def _warn_missing_credentials(config) -> None:
    if not config.telegram.bot_token or not config.telegram.chat_id:
        console.print(
            "[yellow]⚠  Telegram bot token or chat ID is not configured. "
            "Set [cyan]TELEGRAM_BOT_TOKEN[/cyan] and [cyan]TELEGRAM_CHAT_ID[/cyan] "
            "(or add them to ~/.pingwire/.env).[/yellow]"
        )


# ============================================================================
# Gateway / Server
# ============================================================================


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (defaults to config.gateway.host)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Gateway port (defaults to config.gateway.port)"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
):
    """Start the notification gateway."""
    import uvicorn

    from pingwire.config.loader import load_config
    from pingwire.gateway.api import create_gateway_app

    _configure_logging(verbose)
    config = load_config()
    _warn_missing_credentials(config)
    if not config.gateway.auth_key:
        console.print("[yellow]⚠  No auth key configured; POST /send will reject every request.[/yellow]")

    host = host or config.gateway.host
    port = int(port or config.gateway.port)

    console.print(f"{__logo__} Starting pingwire gateway on {host}:{port}...")
    uvicorn.run(
        create_gateway_app(config),
        host=host,
        port=port,
        log_level="debug" if verbose else "warning",
        access_log=verbose,
    )


# ============================================================================
# One-off delivery
# ============================================================================


@app.command()
def send(
    message: str = typer.Argument(..., help="Message text, or '-' to read from stdin"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
):
    """Deliver a message to the configured Telegram chat."""
    from pingwire.channels.telegram import TelegramTransport
    from pingwire.config.loader import load_config
    from pingwire.delivery.pipeline import DeliveryPipeline

    _configure_logging(verbose)
    config = load_config()
    _warn_missing_credentials(config)

    text = sys.stdin.read() if message == "-" else message
    pipeline = DeliveryPipeline(TelegramTransport(config.telegram), config.delivery_settings)
    result = asyncio.run(pipeline.deliver(text, config.credentials))

    if not result.success:
        console.print(f"[red]✗[/red] {result.error}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Sent {result.sent_parts} part(s)")
