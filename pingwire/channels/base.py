"""Base interface for outbound transports."""

from abc import ABC, abstractmethod

from pingwire.delivery.models import DeliveryCredentials, SendResult


class BaseTransport(ABC):
    """
    A single-message send capability.

    Implementations must not retry and must not raise for delivery
    problems: failures come back as ``SendResult.failed``. A failed result
    does not guarantee the message was not delivered.
    """

    name: str = "base"

    @abstractmethod
    async def send_message(self, text: str, credentials: DeliveryCredentials) -> SendResult:
        """Send one message that already fits the chat's size limit."""
        ...
