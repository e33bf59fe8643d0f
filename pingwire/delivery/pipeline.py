"""Sequential, paced delivery of a possibly oversized message.

A message that fits the effective maximum is sent as-is. Anything longer is
split by the chunker and each part is sent in order with a ``Part n/total:``
header, pausing between parts to stay under the chat API's rate limit. The
first failing part aborts the delivery; parts already sent are not recalled
and the whole delivery is reported as failed.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from loguru import logger

from pingwire.channels.base import BaseTransport
from pingwire.delivery.chunker import split_into_chunks
from pingwire.delivery.models import (
    DeliveryCredentials,
    DeliveryErrorKind,
    DeliveryResult,
    DeliverySettings,
)
from pingwire.utils.helpers import redact_secrets

Sleep = Callable[[float], Awaitable[None]]


def format_part(content: str, position: int, total: int) -> str:
    """Prefix a chunk with its part header when the delivery has several parts."""
    if total <= 1:
        return content
    return f"Part {position}/{total}:\n\n{content}"


class DeliveryPipeline:
    """
    Delivers one message through a transport.

    Instances hold no per-delivery state, so one pipeline may serve
    concurrent requests; each ``deliver`` call is self-contained.
    """

    def __init__(
        self,
        transport: BaseTransport,
        settings: DeliverySettings | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.transport = transport
        self.settings = settings or DeliverySettings()
        self._sleep = sleep

    async def deliver(self, message: str, credentials: DeliveryCredentials) -> DeliveryResult:
        """Send ``message``, splitting it into parts when it is too long."""
        trimmed = message.strip()
        if not trimmed:
            return DeliveryResult.failed(DeliveryErrorKind.EMPTY_INPUT, "Message cannot be empty")

        if len(trimmed) <= self.settings.effective_max:
            return await self._deliver_single(trimmed, credentials)
        return await self._deliver_chunks(trimmed, credentials)

    async def _deliver_single(self, text: str, credentials: DeliveryCredentials) -> DeliveryResult:
        try:
            result = await self.transport.send_message(text, credentials)
        except Exception as e:
            logger.exception(f"Unexpected error while sending message via {self.transport.name}")
            return DeliveryResult.failed(
                DeliveryErrorKind.TRANSPORT_FAILURE,
                redact_secrets(str(e) or "Unknown error occurred while sending message"),
            )

        if not result.success:
            return DeliveryResult.failed(
                DeliveryErrorKind.TRANSPORT_FAILURE,
                result.error or "Unknown error occurred while sending message",
            )
        logger.info(f"Delivered message via {self.transport.name} ({len(text)} chars)")
        return DeliveryResult.delivered(1)

    async def _deliver_chunks(self, message: str, credentials: DeliveryCredentials) -> DeliveryResult:
        # Position of the part in flight; 0 while the message is still being split.
        position, total = 0, 0
        try:
            chunks = split_into_chunks(message, self.settings.effective_max)
            total = len(chunks)
            logger.info(f"Message of {len(message)} chars split into {total} parts")

            for position, chunk in enumerate(chunks, start=1):
                text = format_part(chunk, position, total)
                if len(text) > self.settings.max_message_length:
                    logger.error(
                        f"Part {position}/{total} is {len(text)} chars, "
                        f"over the {self.settings.max_message_length} char limit"
                    )
                    return DeliveryResult.failed(
                        DeliveryErrorKind.CHUNK_TOO_LARGE,
                        f"Chunk {position} exceeds Telegram's message length limit",
                    )

                result = await self.transport.send_message(text, credentials)
                if not result.success:
                    return DeliveryResult.failed(
                        DeliveryErrorKind.TRANSPORT_FAILURE,
                        f"Failed to send part {position}/{total}: {result.error or 'unknown error'}",
                    )

                if position < total:
                    await self._sleep(self.settings.chunk_delay)
        except Exception as e:
            error = redact_secrets(str(e)) or type(e).__name__
            if not position:
                logger.exception("Unexpected error while splitting message")
                return DeliveryResult.failed(
                    DeliveryErrorKind.TRANSPORT_FAILURE, f"Failed to split message: {error}"
                )
            logger.exception(f"Unexpected error while sending part {position}/{total}")
            return DeliveryResult.failed(
                DeliveryErrorKind.TRANSPORT_FAILURE,
                f"Failed to send part {position}/{total}: {error}",
            )

        logger.info(f"Delivered {total} parts via {self.transport.name}")
        return DeliveryResult.delivered(total)
