"""Delivery errors for outbound messages.

Transports raise these internally and convert them into a failed
``SendResult`` at their public boundary.
"""


class OutboundDeliveryError(RuntimeError):
    """Base class for outbound delivery errors."""


class TransportError(OutboundDeliveryError):
    """The chat API rejected the message or could not be reached."""
