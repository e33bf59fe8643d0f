"""Utility functions for pingwire."""

from pingwire.utils.helpers import redact_secrets, utc_timestamp

__all__ = ["redact_secrets", "utc_timestamp"]
