"""
Module: consignment_engines.statements
Responsibility:
    Reconcile a consignor's ledger over one period: the balance carried in,
    what was earned and paid during the period, and the balance carried out.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    The period is passed in; this module never reads the clock.

Invariants enforced:
    - The period is half-open: period_start <= moment < period_end.
    - opening_balance == earnings - payouts dated before period_start.
    - closing_balance == opening_balance + total_earnings - total_payouts,
      so one period's closing balance is the next period's opening balance.
    - Payouts are dated by created_at and count whether or not they have
      been disbursed, the same rule compute_ledger applies.  A statement
      whose period covers every row therefore closes at the ledger's
      pending balance.
    - Rows dated on or after period_end are ignored.

Failure modes:
    - ValueError when period_end is not after period_start.

Usage:
    from consignment_engines.periods import month_period
    from consignment_engines.statements import compute_statement

    start, end = month_period(2024, 1)
    statement = compute_statement(transactions, payouts, start, end)
    statement.closing_balance
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from consignment_kernel.domain.clock import as_utc
from consignment_kernel.domain.records import PayoutRecord, TransactionRecord
from consignment_kernel.logging_config import get_logger
from consignment_engines.ledger import ZERO, decimal_sum
from consignment_engines.tracer import traced_engine

logger = get_logger("engines.statements")


@dataclass(frozen=True)
class ConsignorStatement:
    """
    One period of a consignor's ledger.

    Guarantees:
        - closing_balance == opening_balance + total_earnings - total_payouts.
        - items_sold == number of sales inside the period.
    """

    period_start: datetime
    period_end: datetime
    opening_balance: Decimal
    total_sales: Decimal
    total_earnings: Decimal
    total_payouts: Decimal
    closing_balance: Decimal
    items_sold: int
    payout_count: int
    statement_number: str = ""


def statement_number(consignor_id: UUID, period_start: datetime) -> str:
    """``STMT-2024-01-PRV1A2B3C4D``: period month plus the consignor id prefix."""
    start = as_utc(period_start)
    return f"STMT-{start.year}-{start.month:02d}-PRV{str(consignor_id)[:8].upper()}"


@traced_engine(
    "statement",
    "1.0",
    fingerprint_fields=("transactions", "payouts", "period_start", "period_end"),
)
def compute_statement(
    transactions: Sequence[TransactionRecord],
    payouts: Sequence[PayoutRecord],
    period_start: datetime,
    period_end: datetime,
    consignor_id: UUID | None = None,
) -> ConsignorStatement:
    """
    Compute the statement for ``[period_start, period_end)``.

    Args:
        transactions: Every sale of the consignor, any date.
        payouts: Every payout of the consignor, any date.
        period_start: Inclusive lower bound.
        period_end: Exclusive upper bound.
        consignor_id: When given, the statement number is filled in.

    Raises:
        ValueError: If period_end <= period_start.
    """
    start = as_utc(period_start)
    end = as_utc(period_end)
    if end <= start:
        raise ValueError(f"period_end {end.isoformat()} is not after period_start {start.isoformat()}")

    earlier_sales = [t for t in transactions if as_utc(t.sale_date) < start]
    period_sales = [t for t in transactions if start <= as_utc(t.sale_date) < end]
    earlier_payouts = [p for p in payouts if as_utc(p.created_at) < start]
    period_payouts = [p for p in payouts if start <= as_utc(p.created_at) < end]

    opening = (
        decimal_sum(t.consignor_amount for t in earlier_sales)
        - decimal_sum(p.amount for p in earlier_payouts)
    )
    earnings = decimal_sum(t.consignor_amount for t in period_sales)
    paid = decimal_sum(p.amount for p in period_payouts)
    closing = opening + earnings - paid

    if closing < ZERO:
        logger.warning("statement_negative_closing_balance", extra={
            "period_start": start.isoformat(),
            "closing_balance": str(closing),
        })

    statement = ConsignorStatement(
        period_start=start,
        period_end=end,
        opening_balance=opening,
        total_sales=decimal_sum(t.sale_price for t in period_sales),
        total_earnings=earnings,
        total_payouts=paid,
        closing_balance=closing,
        items_sold=len(period_sales),
        payout_count=len(period_payouts),
        statement_number=statement_number(consignor_id, start) if consignor_id is not None else "",
    )

    logger.debug("statement_computed", extra={
        "period_start": start.isoformat(),
        "items_sold": statement.items_sold,
        "closing_balance": str(closing),
    })
    return statement
