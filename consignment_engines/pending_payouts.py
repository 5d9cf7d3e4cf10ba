"""
Module: consignment_engines.pending_payouts
Responsibility:
    Group the organization's not-yet-paid-out sales by consignor so the shop
    can see who is due a payout and for how much.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Only transactions with payout_id None are considered.
    - period_end_before is inclusive (sale_date <= period_end_before).
    - minimum_amount is inclusive (pending_amount >= minimum_amount).
    - Output is ordered by pending amount, largest first, then consignor id.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from consignment_kernel.domain.records import TransactionRecord
from consignment_kernel.logging_config import get_logger
from consignment_engines.ledger import decimal_sum
from consignment_engines.periods import as_utc
from consignment_engines.tracer import traced_engine

logger = get_logger("engines.pending_payouts")


@dataclass(frozen=True)
class PendingPayoutGroup:
    """Unpaid sales of one consignor."""

    consignor_id: UUID
    pending_amount: Decimal
    transaction_count: int
    earliest_sale: datetime
    latest_sale: datetime
    transaction_ids: tuple[UUID, ...]


@traced_engine(
    "pending_payouts",
    "1.0",
    fingerprint_fields=("transactions", "minimum_amount", "period_end_before"),
)
def summarize_pending_payouts(
    transactions: Sequence[TransactionRecord],
    minimum_amount: Decimal | None = None,
    period_end_before: datetime | None = None,
) -> tuple[PendingPayoutGroup, ...]:
    """
    Summarize unpaid consignor shares per consignor.

    Args:
        transactions: Organization transactions (paid ones are ignored).
        minimum_amount: Drop groups owed less than this.
        period_end_before: Ignore sales after this instant.

    Returns:
        Tuple of PendingPayoutGroup, largest pending amount first.
    """
    cutoff = as_utc(period_end_before) if period_end_before is not None else None
    grouped: dict[UUID, list[TransactionRecord]] = {}

    for txn in transactions:
        if txn.is_paid_out:
            continue
        if cutoff is not None and as_utc(txn.sale_date) > cutoff:
            continue
        grouped.setdefault(txn.consignor_id, []).append(txn)

    groups: list[PendingPayoutGroup] = []
    for consignor_id, txns in grouped.items():
        pending = decimal_sum(t.consignor_amount for t in txns)
        if minimum_amount is not None and pending < minimum_amount:
            continue
        sale_dates = [t.sale_date for t in txns]
        groups.append(PendingPayoutGroup(
            consignor_id=consignor_id,
            pending_amount=pending,
            transaction_count=len(txns),
            earliest_sale=min(sale_dates, key=as_utc),
            latest_sale=max(sale_dates, key=as_utc),
            transaction_ids=tuple(t.id for t in txns),
        ))

    groups.sort(key=lambda g: str(g.consignor_id))
    groups.sort(key=lambda g: g.pending_amount, reverse=True)

    logger.info("pending_payouts_summarized", extra={
        "consignor_count": len(groups),
        "minimum_amount": str(minimum_amount) if minimum_amount is not None else None,
    })

    return tuple(groups)
