"""Value types shared by the chunker, the pipeline and the transports."""

from dataclasses import dataclass, field
from enum import Enum


class DeliveryErrorKind(str, Enum):
    """Why a delivery failed."""
    EMPTY_INPUT = "empty_input"
    CHUNK_TOO_LARGE = "chunk_too_large"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class DeliveryCredentials:
    """Bot token and destination chat, owned by the caller. Never logged."""

    bot_token: str = field(repr=False)
    chat_id: str = field(repr=False)


@dataclass(frozen=True)
class DeliverySettings:
    """Size and pacing limits for one delivery."""

    max_message_length: int = 4096
    safety_margin: int = 200
    chunk_delay: float = 1.0

    def __post_init__(self) -> None:
        if self.safety_margin < 0:
            raise ValueError("safety_margin must not be negative")
        if self.chunk_delay < 0:
            raise ValueError("chunk_delay must not be negative")
        if self.effective_max <= 0:
            raise ValueError(
                f"safety_margin ({self.safety_margin}) must be smaller than "
                f"max_message_length ({self.max_message_length})"
            )

    @property
    def effective_max(self) -> int:
        """Largest chunk body that still leaves room for the part header."""
        return self.max_message_length - self.safety_margin


@dataclass(frozen=True)
class SendResult:
    """Outcome of a single transport call."""

    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "SendResult":
        return cls(success=True)

    @classmethod
    def failed(cls, error: str) -> "SendResult":
        return cls(success=False, error=error)


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a full (possibly multi-part) delivery.

    There is no partial-success state: ``sent_parts`` is only set on success,
    even when earlier parts of a failed delivery did reach the chat.
    """

    success: bool
    sent_parts: int = 0
    error: str | None = None
    error_kind: DeliveryErrorKind | None = None

    @classmethod
    def delivered(cls, parts: int) -> "DeliveryResult":
        return cls(success=True, sent_parts=parts)

    @classmethod
    def failed(cls, kind: DeliveryErrorKind, error: str) -> "DeliveryResult":
        return cls(success=False, error=error, error_kind=kind)
