"""
Module: consignment_engines.consignor_metrics
Responsibility:
    Compose the ledger, period and item engines into the single metrics
    record shown on consignor dashboards and approval screens.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Recomputed on every call; nothing is cached or mutated.
    - Identical inputs produce equal ConsignorMetrics.
    - last_payout_* follow the most recently *created* payout, matching
      what the shop sees in its payout list.

Usage:
    from consignment_engines.consignor_metrics import compute_consignor_metrics

    metrics = compute_consignor_metrics(items, transactions, payouts, now=now)
    payload = metrics.to_dict()
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from consignment_kernel.domain.records import ItemRecord, PayoutRecord, TransactionRecord
from consignment_kernel.logging_config import get_logger
from consignment_engines.item_metrics import compute_item_metrics
from consignment_engines.ledger import ZERO, compute_ledger
from consignment_engines.periods import as_utc, bucket_transactions, period_windows
from consignment_engines.tracer import traced_engine

logger = get_logger("engines.consignor_metrics")


@dataclass(frozen=True)
class ConsignorMetrics:
    """
    Balance and performance figures for one consignor.

    Guarantees:
        - pending_balance == total_earnings - total_paid.
        - available_items + sold_items + removed_items == total_items.
    """

    total_items: int
    available_items: int
    sold_items: int
    removed_items: int
    inventory_value: Decimal
    pending_balance: Decimal
    total_earnings: Decimal
    total_paid: Decimal
    earnings_this_month: Decimal
    earnings_last_month: Decimal
    sales_this_month: int
    sales_last_month: int
    last_sale_date: datetime | None
    last_payout_date: datetime | None
    last_payout_amount: Decimal
    average_item_price: Decimal
    average_days_to_sell: Decimal

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe dict: Decimals as strings, datetimes as ISO-8601."""
        result: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Decimal):
                value = str(value)
            elif isinstance(value, datetime):
                value = value.isoformat()
            result[f.name] = value
        return result


def latest_payout(payouts: Sequence[PayoutRecord]) -> PayoutRecord | None:
    """The payout with the greatest created_at (first wins on ties)."""
    latest: PayoutRecord | None = None
    for payout in payouts:
        if latest is None or as_utc(payout.created_at) > as_utc(latest.created_at):
            latest = payout
    return latest


def latest_sale_date(transactions: Sequence[TransactionRecord]) -> datetime | None:
    """The most recent sale date, or None when there are no sales."""
    if not transactions:
        return None
    return max((t.sale_date for t in transactions), key=as_utc)


@traced_engine(
    "consignor_metrics",
    "1.0",
    fingerprint_fields=("items", "transactions", "payouts", "now"),
)
def compute_consignor_metrics(
    items: Sequence[ItemRecord],
    transactions: Sequence[TransactionRecord],
    payouts: Sequence[PayoutRecord],
    now: datetime,
) -> ConsignorMetrics:
    """
    Compute the full metrics record for one consignor.

    Args:
        items: The consignor's items.
        transactions: The consignor's sales.
        payouts: The consignor's payouts.
        now: Reference instant for the month windows (caller's clock).

    Returns:
        ConsignorMetrics.
    """
    ledger = compute_ledger(transactions, payouts)
    windows = period_windows(now)
    activity = bucket_transactions(transactions, windows)
    item_metrics = compute_item_metrics(items, transactions)
    last_payout = latest_payout(payouts)

    metrics = ConsignorMetrics(
        total_items=item_metrics.total_items,
        available_items=item_metrics.available_items,
        sold_items=item_metrics.sold_items,
        removed_items=item_metrics.removed_items,
        inventory_value=item_metrics.inventory_value,
        pending_balance=ledger.pending_balance,
        total_earnings=ledger.total_earnings,
        total_paid=ledger.total_paid,
        earnings_this_month=activity.earnings_this_month,
        earnings_last_month=activity.earnings_last_month,
        sales_this_month=activity.sales_this_month,
        sales_last_month=activity.sales_last_month,
        last_sale_date=latest_sale_date(transactions),
        last_payout_date=last_payout.created_at if last_payout else None,
        last_payout_amount=last_payout.amount if last_payout else ZERO,
        average_item_price=item_metrics.average_item_price,
        average_days_to_sell=item_metrics.average_days_to_sell,
    )

    logger.info("consignor_metrics_computed", extra={
        "total_items": metrics.total_items,
        "pending_balance": str(metrics.pending_balance),
        "sales_this_month": metrics.sales_this_month,
    })

    return metrics
