"""Shared utilities: generators."""

from accounts.shared.utils.generators import generate_id

__all__ = [
    "generate_id",
]
