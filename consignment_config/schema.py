"""
Settings schema.

``MetricsSettings`` is the only configuration artifact the services see.
YAML files are parsed into it by the loader; defaults below apply to any key
a file leaves out.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MetricsSettings:
    """Tunables for the consignor ledger services."""

    currency: str = "USD"
    top_consignor_count: int = 5
    activity_days: int = 30
    minimum_payout_amount: Decimal = Decimal("0.00")
    consignor_number_prefix: str = "PRV"
    invite_code_length: int = 8
