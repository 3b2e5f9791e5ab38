"""
Configuration Loader (``receipt_config.loader``).

Responsibility
--------------
Loads a YAML policy file and parses it into a validated
``RecurrencePolicy``.  Internal tooling: the single public entry point
for runtime config is ``receipt_config.get_active_config()``.

Invariants enforced
-------------------
* ``window_days`` lies in 0..27 (a larger window would reach a day that
  has already passed in the same month).
* ``number_prefix`` is a non-empty string without whitespace.
* ``min_recurrence_day`` <= ``max_recurrence_day``, both within 1..28.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Out-of-range values  -> ``InvalidRecurrencePolicyError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from receipt_kernel.domain.records import MAX_RECURRENCE_DAY, MIN_RECURRENCE_DAY
from receipt_kernel.exceptions import InvalidRecurrencePolicyError

from receipt_config.schema import RecurrencePolicy

MAX_WINDOW_DAYS = MAX_RECURRENCE_DAY - MIN_RECURRENCE_DAY


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _int_field(section: dict[str, Any], name: str, default: int) -> int:
    value = section.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRecurrencePolicyError(name, value, "must be an integer")
    return value


def _str_field(section: dict[str, Any], name: str, default: str) -> str:
    value = section.get(name, default)
    if not isinstance(value, str):
        raise InvalidRecurrencePolicyError(name, value, "must be a string")
    return value


def validate_policy(policy: RecurrencePolicy) -> RecurrencePolicy:
    """Check every field of ``policy``; return it unchanged when valid."""
    if not 0 <= policy.window_days <= MAX_WINDOW_DAYS:
        raise InvalidRecurrencePolicyError(
            "window_days", policy.window_days, f"must be within 0..{MAX_WINDOW_DAYS}"
        )
    prefix = policy.number_prefix
    if not prefix or prefix != prefix.strip() or any(c.isspace() for c in prefix):
        raise InvalidRecurrencePolicyError(
            "number_prefix", prefix, "must be non-empty and contain no whitespace"
        )
    for name in ("min_recurrence_day", "max_recurrence_day"):
        day = getattr(policy, name)
        if not MIN_RECURRENCE_DAY <= day <= MAX_RECURRENCE_DAY:
            raise InvalidRecurrencePolicyError(
                name, day, f"must be within {MIN_RECURRENCE_DAY}..{MAX_RECURRENCE_DAY}"
            )
    if policy.min_recurrence_day > policy.max_recurrence_day:
        raise InvalidRecurrencePolicyError(
            "min_recurrence_day",
            policy.min_recurrence_day,
            "must not exceed max_recurrence_day",
        )
    return policy


def parse_policy(data: dict[str, Any]) -> RecurrencePolicy:
    """
    Parse a ``RecurrencePolicy`` from a loaded YAML document.

    Absent keys take the schema defaults.  ``payment_method`` may be null.
    """
    defaults = RecurrencePolicy()
    section = data.get("recurrence") or {}
    payment_method = section.get("payment_method", defaults.payment_method)
    policy = RecurrencePolicy(
        window_days=_int_field(section, "window_days", defaults.window_days),
        number_prefix=_str_field(section, "number_prefix", defaults.number_prefix),
        payment_method=str(payment_method) if payment_method is not None else None,
        min_recurrence_day=_int_field(
            section, "min_recurrence_day", defaults.min_recurrence_day
        ),
        max_recurrence_day=_int_field(
            section, "max_recurrence_day", defaults.max_recurrence_day
        ),
        config_id=str(data.get("config_id", defaults.config_id)),
        version=_int_field(data, "version", defaults.version),
    )
    return validate_policy(policy)


def compute_checksum(policy: RecurrencePolicy) -> str:
    """Deterministic SHA-256 of the policy values, for change detection."""
    canonical = json.dumps(
        {
            "window_days": policy.window_days,
            "number_prefix": policy.number_prefix,
            "payment_method": policy.payment_method,
            "min_recurrence_day": policy.min_recurrence_day,
            "max_recurrence_day": policy.max_recurrence_day,
            "config_id": policy.config_id,
            "version": policy.version,
        },
        sort_keys=True,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
