"""Shared telemetry: logging setup."""

from accounts.shared.telemetry.logging import setup_logging

__all__ = [
    "setup_logging",
]
