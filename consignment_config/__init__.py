"""
consignment_config -- single public entrypoint for ledger settings.

Responsibility:
    Provides the ONLY way to obtain settings at runtime through
    ``get_active_settings()``.  Services receive the returned
    ``MetricsSettings`` by injection and never read files themselves.

Failure modes:
    - ``FileNotFoundError`` -- the requested settings file does not exist.
    - ``ConfigurationError`` -- a value failed validation.

Audit relevance:
    Every successful call emits a ``CONSIGNMENT_CONFIG_TRACE`` log entry
    with the source path and settings checksum.
"""

from __future__ import annotations

import logging
from pathlib import Path

from consignment_config.loader import compute_checksum, load_yaml_file, parse_settings
from consignment_config.schema import MetricsSettings

_logger = logging.getLogger("consignment_kernel.config")

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_settings(path: Path | str | None = None) -> MetricsSettings:
    """
    Load, validate and return the active settings.

    Args:
        path: YAML file to load; the packaged ``defaults.yaml`` when None.

    Returns:
        Frozen MetricsSettings.
    """
    source = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    settings = parse_settings(load_yaml_file(source))

    _logger.info(
        "CONSIGNMENT_CONFIG_TRACE",
        extra={
            "trace_type": "CONSIGNMENT_CONFIG_TRACE",
            "source": str(source),
            "checksum": compute_checksum(settings),
            "currency": settings.currency,
        },
    )
    return settings


__all__ = [
    "MetricsSettings",
    "get_active_settings",
    "DEFAULT_SETTINGS_PATH",
]
