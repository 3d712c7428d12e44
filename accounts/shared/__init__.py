"""Shared utilities: telemetry and cross-cutting helpers.

Used by application and infrastructure. No business logic.
"""

from accounts.shared.utils import generate_id

__all__ = [
    "generate_id",
]
