"""
Module: consignment_engines.activity
Responsibility:
    Recent activity for one consignor over a trailing window of days:
    sales, newly listed items and payouts, newest first.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - The cutoff is inclusive: a record stamped exactly at now - days is in.
    - Each list is sorted newest first.

Failure modes:
    - ValueError when days is not positive.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from consignment_kernel.domain.records import ItemRecord, PayoutRecord, TransactionRecord
from consignment_kernel.logging_config import get_logger
from consignment_engines.periods import as_utc

logger = get_logger("engines.activity")


@dataclass(frozen=True)
class ConsignorActivity:
    """Activity of one consignor since ``cutoff``."""

    consignor_id: UUID
    days: int
    cutoff: datetime
    transactions: tuple[TransactionRecord, ...]
    items: tuple[ItemRecord, ...]
    payouts: tuple[PayoutRecord, ...]

    @property
    def total_transactions(self) -> int:
        return len(self.transactions)

    @property
    def total_items_added(self) -> int:
        return len(self.items)

    @property
    def total_payouts(self) -> int:
        return len(self.payouts)


def compute_activity(
    consignor_id: UUID,
    items: Sequence[ItemRecord],
    transactions: Sequence[TransactionRecord],
    payouts: Sequence[PayoutRecord],
    now: datetime,
    days: int = 30,
) -> ConsignorActivity:
    """
    Collect a consignor's activity in the last ``days`` days.

    Raises:
        ValueError: If days < 1.
    """
    if days < 1:
        raise ValueError(f"days must be positive, got {days}")

    cutoff = as_utc(now) - timedelta(days=days)

    recent_txns = sorted(
        (t for t in transactions if as_utc(t.sale_date) >= cutoff),
        key=lambda t: as_utc(t.sale_date),
        reverse=True,
    )
    recent_items = sorted(
        (i for i in items if as_utc(i.created_at) >= cutoff),
        key=lambda i: as_utc(i.created_at),
        reverse=True,
    )
    recent_payouts = sorted(
        (p for p in payouts if as_utc(p.created_at) >= cutoff),
        key=lambda p: as_utc(p.created_at),
        reverse=True,
    )

    logger.debug("activity_collected", extra={
        "consignor_id": str(consignor_id),
        "days": days,
        "transactions": len(recent_txns),
        "items": len(recent_items),
        "payouts": len(recent_payouts),
    })

    return ConsignorActivity(
        consignor_id=consignor_id,
        days=days,
        cutoff=cutoff,
        transactions=tuple(recent_txns),
        items=tuple(recent_items),
        payouts=tuple(recent_payouts),
    )
