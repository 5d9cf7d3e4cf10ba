"""
Module: consignment_engines.split
Responsibility:
    Divide a sale price between the consignor and the shop using the
    consignor's commission rate.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - The rate is a fraction: 0.60 gives the consignor 60% of the sale.
    - consignor_amount is rounded to cents with banker's rounding
      (ROUND_HALF_EVEN); shop_amount takes the remainder, so
      consignor_amount + shop_amount == sale_price exactly.

Failure modes:
    - ValueError for a negative sale price or a rate outside [0, 1].
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal

CENT = Decimal("0.01")


@dataclass(frozen=True)
class SaleSplit:
    """Consignor and shop shares of one sale."""

    sale_price: Decimal
    commission_rate: Decimal
    consignor_amount: Decimal
    shop_amount: Decimal


def split_sale(sale_price: Decimal, commission_rate: Decimal) -> SaleSplit:
    """
    Split ``sale_price`` at ``commission_rate``.

    Example:
        split_sale(Decimal("19.99"), Decimal("0.5"))
        # consignor 10.00 (9.995 rounds to even), shop 9.99
    """
    if sale_price < 0:
        raise ValueError(f"sale_price must not be negative, got {sale_price}")
    if not Decimal("0") <= commission_rate <= Decimal("1"):
        raise ValueError(f"commission_rate must be within [0, 1], got {commission_rate}")

    consignor_amount = (sale_price * commission_rate).quantize(CENT, rounding=ROUND_HALF_EVEN)
    return SaleSplit(
        sale_price=sale_price,
        commission_rate=commission_rate,
        consignor_amount=consignor_amount,
        shop_amount=sale_price - consignor_amount,
    )
