"""Outbound transports."""

from pingwire.channels.base import BaseTransport
from pingwire.channels.telegram import TelegramTransport

__all__ = ["BaseTransport", "TelegramTransport"]
