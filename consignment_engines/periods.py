"""
Module: consignment_engines.periods
Responsibility:
    Compute calendar-month windows (this month, last month) in UTC and
    bucket sales into them for dashboard earnings and sales counts.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    ``now`` is always passed in; this module never reads the clock.

Invariants enforced:
    - this_month_start is the first instant of now's month in UTC.
    - last_month_end == this_month_start (exclusive upper bound).
    - Month arithmetic goes through datetime/timedelta, so January rolls
      back to December of the previous year and month lengths need no
      special cases.
    - Naive datetimes are interpreted as UTC.

Failure modes:
    - None.

Usage:
    from consignment_engines.periods import period_windows

    windows = period_windows(datetime(2024, 1, 15, tzinfo=timezone.utc))
    windows.last_month_start  # 2023-12-01T00:00:00+00:00
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from consignment_kernel.domain.clock import as_utc
from consignment_kernel.domain.records import TransactionRecord
from consignment_kernel.logging_config import get_logger
from consignment_engines.ledger import ZERO

logger = get_logger("engines.periods")


def month_start(value: datetime) -> datetime:
    """First instant of value's calendar month, in UTC."""
    value = as_utc(value)
    return datetime(value.year, value.month, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class PeriodWindows:
    """
    Month boundaries relative to a reference instant.

    Guarantees:
        - last_month_start < last_month_end == this_month_start.
    """

    this_month_start: datetime
    last_month_start: datetime
    last_month_end: datetime

    def in_this_month(self, moment: datetime) -> bool:
        return as_utc(moment) >= self.this_month_start

    def in_last_month(self, moment: datetime) -> bool:
        moment = as_utc(moment)
        return self.last_month_start <= moment < self.last_month_end


def period_windows(now: datetime) -> PeriodWindows:
    """
    Compute this-month / last-month windows for ``now``.

    The previous month is found by stepping one day back from the start of
    the current month and truncating to that month's first day.
    """
    this_start = month_start(now)
    last_start = month_start(this_start - timedelta(days=1))
    return PeriodWindows(
        this_month_start=this_start,
        last_month_start=last_start,
        last_month_end=this_start,
    )


def month_period(year: int, month: int) -> tuple[datetime, datetime]:
    """
    ``[start, end)`` of a calendar month in UTC.

    Raises:
        ValueError: If month is outside 1..12.
    """
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    end = month_start(start + timedelta(days=32))
    return start, end


@dataclass(frozen=True)
class PeriodActivity:
    """Earnings and sale counts bucketed by month window."""

    earnings_this_month: Decimal
    earnings_last_month: Decimal
    sales_this_month: int
    sales_last_month: int


def bucket_transactions(
    transactions: Sequence[TransactionRecord],
    windows: PeriodWindows,
) -> PeriodActivity:
    """
    Bucket sales into the this-month and last-month windows.

    Sales earlier than last_month_start fall in neither bucket.  Sales dated
    after ``now`` still count as this month (the window has no upper bound).
    """
    earnings_this = ZERO
    earnings_last = ZERO
    count_this = 0
    count_last = 0

    for txn in transactions:
        if windows.in_this_month(txn.sale_date):
            earnings_this += txn.consignor_amount
            count_this += 1
        elif windows.in_last_month(txn.sale_date):
            earnings_last += txn.consignor_amount
            count_last += 1

    logger.debug("transactions_bucketed", extra={
        "this_month_start": windows.this_month_start.isoformat(),
        "sales_this_month": count_this,
        "sales_last_month": count_last,
    })

    return PeriodActivity(
        earnings_this_month=earnings_this,
        earnings_last_month=earnings_last,
        sales_this_month=count_this,
        sales_last_month=count_last,
    )
