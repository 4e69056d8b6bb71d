"""
Utility functions for the marketing workflow service.

Includes:
- Prefixed id generation
- UTC datetime helpers
"""

from datetime import datetime, timezone
from uuid import uuid4


def generate_id(prefix: str) -> str:
    """
    Generate a collision-resistant identifier.

    Args:
        prefix: Short kind marker, e.g. "step" or "workflow"

    Returns:
        String of the form "<prefix>_<32 hex chars>"
    """
    return f"{prefix}_{uuid4().hex}"


def utc_now() -> datetime:
    """
    Get the current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def completion_rate(completed: int, enrolled: int) -> float:
    """Percentage of enrolled clients that completed, 0.0 when nobody enrolled."""
    if enrolled <= 0:
        return 0.0
    return round(completed / enrolled * 100, 1)
