"""
Module: consignment_engines.dashboard
Responsibility:
    Organization-wide consignor dashboard: head counts by status, new
    consignors this month versus last, growth rate, and the consignors
    owed the most.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Rankings use typed ConsignorStanding records and the explicit key
      functions in RANKING_KEYS.
    - The full active set is ranked before truncating to top_n.
    - Ties are broken by display name, then by id, so the ordering is
      total and repeatable.
    - growth_rate is 0 when there were no new consignors last month.

Failure modes:
    - UnknownRankingKeyError when ranking on an unregistered field.
    - ValueError when top_n is negative.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any
from uuid import UUID

from consignment_kernel.domain.records import ConsignorSnapshot, ConsignorStatus, ItemStatus
from consignment_kernel.exceptions import UnknownRankingKeyError
from consignment_kernel.logging_config import get_logger
from consignment_engines.ledger import ZERO, compute_ledger
from consignment_engines.periods import period_windows
from consignment_engines.tracer import traced_engine

logger = get_logger("engines.dashboard")

_PERCENT = Decimal("100")
_RATE_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class ConsignorStanding:
    """A consignor with the computed figures used for ranking."""

    consignor_id: UUID
    display_name: str
    pending_balance: Decimal
    total_earnings: Decimal
    active_items: int
    total_items: int

    @classmethod
    def from_snapshot(cls, snapshot: ConsignorSnapshot) -> ConsignorStanding:
        ledger = compute_ledger(snapshot.transactions, snapshot.payouts)
        return cls(
            consignor_id=snapshot.id,
            display_name=snapshot.display_name,
            pending_balance=ledger.pending_balance,
            total_earnings=ledger.total_earnings,
            active_items=sum(
                1 for i in snapshot.items if i.status == ItemStatus.AVAILABLE
            ),
            total_items=len(snapshot.items),
        )


RANKING_KEYS: dict[str, Callable[[ConsignorStanding], Any]] = {
    "pending_balance": lambda s: s.pending_balance,
    "total_earnings": lambda s: s.total_earnings,
    "active_items": lambda s: s.active_items,
    "total_items": lambda s: s.total_items,
    "display_name": lambda s: s.display_name.casefold(),
}


def rank_consignors(
    standings: Sequence[ConsignorStanding],
    key: str = "pending_balance",
    descending: bool = True,
    limit: int | None = None,
) -> tuple[ConsignorStanding, ...]:
    """
    Order standings by a registered key.

    Args:
        standings: Records to rank.
        key: Name in RANKING_KEYS.
        descending: Highest first when True.
        limit: Keep only the first ``limit`` records.

    Raises:
        UnknownRankingKeyError: If key is not registered.
    """
    key_func = RANKING_KEYS.get(key)
    if key_func is None:
        raise UnknownRankingKeyError(key, tuple(RANKING_KEYS))

    # Stable two-pass sort: the tiebreak order survives the primary sort.
    ordered = sorted(standings, key=lambda s: (s.display_name.casefold(), str(s.consignor_id)))
    ordered = sorted(ordered, key=key_func, reverse=descending)

    if limit is not None:
        ordered = ordered[:limit]
    return tuple(ordered)


def growth_rate(current: int, previous: int) -> Decimal:
    """Percentage change from previous to current, 2 places; 0 if previous is 0."""
    if previous <= 0:
        return ZERO
    rate = Decimal(current - previous) / Decimal(previous) * _PERCENT
    return rate.quantize(_RATE_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class DashboardSummary:
    """Consignor dashboard figures for one organization."""

    total_consignors: int
    active_consignors: int
    pending_consignors: int
    deactivated_consignors: int
    new_this_month: int
    new_last_month: int
    growth_rate: Decimal
    top_by_balance: tuple[ConsignorStanding, ...]


@traced_engine("dashboard", "1.0", fingerprint_fields=("consignors", "now", "top_n"))
def compute_dashboard(
    consignors: Sequence[ConsignorSnapshot],
    now: datetime,
    top_n: int = 5,
) -> DashboardSummary:
    """
    Compute the organization dashboard.

    Args:
        consignors: Every consignor of the organization, with ledger rows.
        now: Reference instant for the month windows.
        top_n: How many consignors to return in top_by_balance.

    Returns:
        DashboardSummary.
    """
    if top_n < 0:
        raise ValueError(f"top_n cannot be negative: {top_n}")

    windows = period_windows(now)
    by_status = {status: 0 for status in ConsignorStatus}
    new_this = 0
    new_last = 0

    for consignor in consignors:
        by_status[consignor.status] += 1
        if windows.in_this_month(consignor.created_at):
            new_this += 1
        elif windows.in_last_month(consignor.created_at):
            new_last += 1

    standings = [
        ConsignorStanding.from_snapshot(c)
        for c in consignors
        if c.status == ConsignorStatus.ACTIVE
    ]
    top = rank_consignors(standings, key="pending_balance", limit=top_n)

    logger.info("dashboard_computed", extra={
        "consignor_count": len(consignors),
        "active_count": by_status[ConsignorStatus.ACTIVE],
        "new_this_month": new_this,
        "top_n": top_n,
    })

    return DashboardSummary(
        total_consignors=len(consignors),
        active_consignors=by_status[ConsignorStatus.ACTIVE],
        pending_consignors=by_status[ConsignorStatus.PENDING],
        deactivated_consignors=by_status[ConsignorStatus.DEACTIVATED],
        new_this_month=new_this,
        new_last_month=new_last,
        growth_rate=growth_rate(new_this, new_last),
        top_by_balance=top,
    )
