"""
Module: consignment_engines.item_metrics
Responsibility:
    Item lifecycle statistics for one consignor: counts by status,
    inventory value on the floor, average price and average days to sell.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - available + sold + removed == total (status is a closed enum).
    - inventory_value only counts AVAILABLE items.
    - average_item_price averages over ALL items; 0 for no items.
    - average_days_to_sell skips sold items without a transaction and
      items whose sale predates their creation; 0 when nothing remains.
    - Transactions are indexed by item_id once, so the per-item lookup is
      O(1) regardless of how many items a consignor holds.

Failure modes:
    - None.  Negative prices and similar bad data pass through unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID

from consignment_kernel.domain.records import ItemRecord, ItemStatus, TransactionRecord
from consignment_kernel.logging_config import get_logger
from consignment_engines.ledger import ZERO, decimal_sum
from consignment_engines.periods import as_utc
from consignment_engines.tracer import traced_engine

logger = get_logger("engines.item_metrics")

_MICROSECONDS_PER_DAY = Decimal(86_400_000_000)


@dataclass(frozen=True)
class ItemMetrics:
    """Counts and averages over a consignor's items."""

    total_items: int
    available_items: int
    sold_items: int
    removed_items: int
    inventory_value: Decimal
    average_item_price: Decimal
    average_days_to_sell: Decimal


def elapsed_days(start: datetime, end: datetime) -> Decimal:
    """
    Exact elapsed time from start to end in fractional days.

    Computed from the timedelta's integer components so no float rounding
    enters the average.
    """
    delta: timedelta = as_utc(end) - as_utc(start)
    micros = delta.seconds * 1_000_000 + delta.microseconds
    return Decimal(delta.days) + Decimal(micros) / _MICROSECONDS_PER_DAY


def index_transactions_by_item(
    transactions: Sequence[TransactionRecord],
) -> dict[UUID, TransactionRecord]:
    """Map item_id to its first transaction in input order."""
    index: dict[UUID, TransactionRecord] = {}
    for txn in transactions:
        index.setdefault(txn.item_id, txn)
    return index


def average_days_to_sell(
    items: Sequence[ItemRecord],
    transactions: Sequence[TransactionRecord],
) -> Decimal:
    """Mean days from listing to sale over sold items with a usable sale."""
    by_item = index_transactions_by_item(transactions)
    total_days = ZERO
    count = 0
    skipped_missing = 0
    skipped_negative = 0

    for item in items:
        if item.status != ItemStatus.SOLD:
            continue
        txn = by_item.get(item.id)
        if txn is None:
            skipped_missing += 1
            continue
        days = elapsed_days(item.created_at, txn.sale_date)
        if days < ZERO:
            skipped_negative += 1
            continue
        total_days += days
        count += 1

    if skipped_missing or skipped_negative:
        logger.debug("days_to_sell_items_skipped", extra={
            "missing_transaction": skipped_missing,
            "negative_elapsed": skipped_negative,
        })

    if count == 0:
        return ZERO
    return total_days / Decimal(count)


@traced_engine("item_metrics", "1.0", fingerprint_fields=("items", "transactions"))
def compute_item_metrics(
    items: Sequence[ItemRecord],
    transactions: Sequence[TransactionRecord],
) -> ItemMetrics:
    """
    Compute item lifecycle metrics.

    Args:
        items: Every item of the consignor.
        transactions: Every sale of the consignor (used for days-to-sell).

    Returns:
        ItemMetrics.
    """
    counts = {status: 0 for status in ItemStatus}
    for item in items:
        counts[item.status] += 1

    inventory_value = decimal_sum(
        i.price for i in items if i.status == ItemStatus.AVAILABLE
    )

    if items:
        average_price = decimal_sum(i.price for i in items) / Decimal(len(items))
    else:
        average_price = ZERO

    return ItemMetrics(
        total_items=len(items),
        available_items=counts[ItemStatus.AVAILABLE],
        sold_items=counts[ItemStatus.SOLD],
        removed_items=counts[ItemStatus.REMOVED],
        inventory_value=inventory_value,
        average_item_price=average_price,
        average_days_to_sell=average_days_to_sell(items, transactions),
    )
