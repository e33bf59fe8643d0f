"""Message chunking and sequential delivery."""

from pingwire.delivery.chunker import split_into_chunks
from pingwire.delivery.models import (
    DeliveryCredentials,
    DeliveryErrorKind,
    DeliveryResult,
    DeliverySettings,
    SendResult,
)

__all__ = [
    "DeliveryCredentials",
    "DeliveryErrorKind",
    "DeliveryResult",
    "DeliverySettings",
    "SendResult",
    "split_into_chunks",
]
