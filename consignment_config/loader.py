"""
Settings Loader (``consignment_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses it into the frozen
``MetricsSettings`` dataclass.  Services do not call this directly; the
single public entrypoint is ``consignment_config.get_active_settings()``.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Keys absent from the file take the dataclass default.
* Invalid values raise ``ConfigurationError`` naming the field.
* ``compute_checksum`` produces a deterministic SHA-256 hash so a running
  service can report exactly which settings it loaded.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Top level not a mapping, bad number, bad currency  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from consignment_config.schema import MetricsSettings
from consignment_kernel.exceptions import ConfigurationError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("<root>", type(data).__name__, "expected a mapping")
    return data


def _positive_int(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(key, value, "expected an integer")
    if value < 1:
        raise ConfigurationError(key, value, "must be at least 1")
    return value


def _non_negative_decimal(data: dict[str, Any], key: str, default: Decimal) -> Decimal:
    value = data.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(key, value, "expected a decimal amount")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ConfigurationError(key, value, "expected a decimal amount") from exc
    if amount < 0:
        raise ConfigurationError(key, value, "cannot be negative")
    return amount


def _currency(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    code = str(value).strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ConfigurationError(key, value, "expected a three-letter currency code")
    return code


def parse_settings(data: dict[str, Any]) -> MetricsSettings:
    """
    Parse ``MetricsSettings`` from a dict.

    Raises:
        ConfigurationError: if any value is invalid.
    """
    defaults = MetricsSettings()
    prefix = str(data.get("consignor_number_prefix", defaults.consignor_number_prefix)).strip()
    if not prefix:
        raise ConfigurationError("consignor_number_prefix", prefix, "cannot be empty")

    return MetricsSettings(
        currency=_currency(data, "currency", defaults.currency),
        top_consignor_count=_positive_int(
            data, "top_consignor_count", defaults.top_consignor_count
        ),
        activity_days=_positive_int(data, "activity_days", defaults.activity_days),
        minimum_payout_amount=_non_negative_decimal(
            data, "minimum_payout_amount", defaults.minimum_payout_amount
        ),
        consignor_number_prefix=prefix,
        invite_code_length=_positive_int(
            data, "invite_code_length", defaults.invite_code_length
        ),
    )


def compute_checksum(settings: MetricsSettings) -> str:
    """Deterministic SHA-256 of the parsed settings."""
    canonical = json.dumps(
        {k: str(v) for k, v in sorted(vars(settings).items())},
        sort_keys=True,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
