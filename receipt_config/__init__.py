"""
receipt_config -- single public entrypoint for recurrence configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  No other component reads configuration
    files directly.  YAML loading is internal and never exposed.

Architecture position:
    Configuration -- sits above ``receipt_kernel`` and below
    ``receipt_services``.  Engines MUST NEVER import from
    ``receipt_config``; services unpack the policy into engine arguments.

Failure modes:
    - ``FileNotFoundError`` -- the requested policy file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``InvalidRecurrencePolicyError`` -- values out of range.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``RECEIPT_CONFIG_TRACE`` log entry with the config id, version,
    checksum and policy values.
"""

from __future__ import annotations

from pathlib import Path

from receipt_kernel.logging_config import get_logger

from receipt_config.loader import compute_checksum, load_yaml_file, parse_policy
from receipt_config.schema import RecurrencePolicy

_logger = get_logger("config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(config_path: Path | str | None = None) -> RecurrencePolicy:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: Policy YAML file.  Defaults to the packaged
            ``sets/default.yaml``.

    Returns:
        Validated ``RecurrencePolicy``.
    """
    path = Path(config_path) if config_path is not None else _DEFAULT_CONFIG_PATH
    policy = parse_policy(load_yaml_file(path))

    _logger.info(
        "RECEIPT_CONFIG_TRACE",
        extra={
            "trace_type": "RECEIPT_CONFIG_TRACE",
            "config_id": policy.config_id,
            "config_version": policy.version,
            "checksum": compute_checksum(policy),
            "config_path": str(path),
            "window_days": policy.window_days,
            "number_prefix": policy.number_prefix,
            "payment_method": policy.payment_method,
        },
    )
    return policy


__all__ = [
    "RecurrencePolicy",
    "get_active_config",
]
