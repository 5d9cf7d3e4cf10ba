"""
Module: consignment_engines.ledger
Responsibility:
    Aggregate a consignor's ledger: total earnings from sales, total paid
    out, and the pending balance still owed.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import consignment_kernel/domain.

Invariants enforced:
    - pending_balance == total_earnings - total_paid, exactly, in Decimal.
    - A negative pending balance is returned as-is, never clamped.  It means
      the consignor was overpaid or a row was mis-entered.
    - Every payout counts toward total_paid, whether or not ``paid_at`` is
      set.  Scheduled payouts therefore reduce the pending balance before
      money moves.

Failure modes:
    - None.  Empty inputs yield a zero summary.

Usage:
    from consignment_engines.ledger import compute_ledger

    summary = compute_ledger(transactions, payouts)
    summary.pending_balance
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from consignment_kernel.domain.records import PayoutRecord, TransactionRecord
from consignment_kernel.logging_config import get_logger
from consignment_engines.tracer import traced_engine

logger = get_logger("engines.ledger")

ZERO = Decimal("0")


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    """Sum Decimals starting from Decimal zero (``sum`` would start at int 0)."""
    return sum(values, ZERO)


@dataclass(frozen=True)
class LedgerSummary:
    """
    Balance figures for one consignor.

    Guarantees:
        - pending_balance == total_earnings - total_paid.
    """

    total_earnings: Decimal
    total_paid: Decimal
    pending_balance: Decimal

    @property
    def is_overpaid(self) -> bool:
        """True when payouts exceed earnings."""
        return self.pending_balance < ZERO


def total_earnings(transactions: Iterable[TransactionRecord]) -> Decimal:
    """Sum of consignor shares over all transactions."""
    return decimal_sum(t.consignor_amount for t in transactions)


def total_paid(payouts: Iterable[PayoutRecord]) -> Decimal:
    """Sum of payout amounts, scheduled and disbursed alike."""
    return decimal_sum(p.amount for p in payouts)


@traced_engine("ledger", "1.0", fingerprint_fields=("transactions", "payouts"))
def compute_ledger(
    transactions: Sequence[TransactionRecord],
    payouts: Sequence[PayoutRecord],
) -> LedgerSummary:
    """
    Compute earnings, payouts and pending balance.

    Args:
        transactions: Every sale of the consignor.
        payouts: Every payout record of the consignor.

    Returns:
        LedgerSummary; zero everywhere for empty inputs.
    """
    earnings = total_earnings(transactions)
    paid = total_paid(payouts)
    pending = earnings - paid

    if pending < ZERO:
        logger.warning("ledger_negative_pending_balance", extra={
            "total_earnings": str(earnings),
            "total_paid": str(paid),
            "pending_balance": str(pending),
        })

    logger.debug("ledger_computed", extra={
        "transaction_count": len(transactions),
        "payout_count": len(payouts),
        "pending_balance": str(pending),
    })

    return LedgerSummary(
        total_earnings=earnings,
        total_paid=paid,
        pending_balance=pending,
    )
