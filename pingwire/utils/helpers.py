"""Utility functions for pingwire."""

import re
from datetime import datetime, timezone


def utc_timestamp() -> str:
    """Get the current UTC time in ISO format with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def redact_secrets(s: str) -> str:
    """Redact strings that look like bot tokens, API keys or passwords.

    Applied to transport errors before they are logged or returned to an
    HTTP caller.
    """
    # Telegram bot tokens, bare or inside an API URL: 123456:AA...
    s = re.sub(r'(bot)?\d{6,}:[A-Za-z0-9_-]{30,}', r'\1***REDACTED***', s)
    # Key=value patterns: api_key="...", token: "...", password=..., etc.
    s = re.sub(
        r'(?i)(api[_-]?key|auth[_-]?key|access[_-]?token|token|secret'
        r'|password|passwd|bearer|authorization'
        r')\s*[=:"\']\s*["\']?(\S{6,})["\']?',
        r'\1=***REDACTED***',
        s,
    )
    return s
