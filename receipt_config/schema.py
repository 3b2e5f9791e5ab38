"""
RecurrencePolicy schema.

The human-authored YAML in ``receipt_config/sets`` is parsed into these
frozen dataclasses by the loader.  Engines never see this type; services
unpack it into plain engine arguments.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RecurrencePolicy:
    """Settings governing automatic receipt generation."""

    window_days: int = 10
    number_prefix: str = "RB-AUTO"
    payment_method: str | None = "PIX"
    min_recurrence_day: int = 1
    max_recurrence_day: int = 28
    config_id: str = "default"
    version: int = 1
