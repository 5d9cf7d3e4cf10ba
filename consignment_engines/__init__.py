"""
Module: consignment_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines: consignor ledger, month windows, item lifecycle
    metrics, the composed consignor metrics record, the organization
    dashboard, activity windows, pending payouts, period statements, sale
    splits and code generation.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import consignment_kernel (domain records, logging, exceptions)
    and sibling engine modules.  MUST NOT import consignment_services.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()``; ``now`` is a parameter.
    - Decimal-only arithmetic for monetary amounts.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from consignment_engines import compute_consignor_metrics
    from consignment_engines.ledger import compute_ledger
    from consignment_engines.periods import period_windows
"""

from consignment_kernel.logging_config import get_logger

logger = get_logger("engines")

from consignment_engines.activity import ConsignorActivity, compute_activity
from consignment_engines.codes import CodeGenerator
from consignment_engines.consignor_metrics import ConsignorMetrics, compute_consignor_metrics
from consignment_engines.dashboard import (
    RANKING_KEYS,
    ConsignorStanding,
    DashboardSummary,
    compute_dashboard,
    growth_rate,
    rank_consignors,
)
from consignment_engines.item_metrics import ItemMetrics, compute_item_metrics
from consignment_engines.ledger import LedgerSummary, compute_ledger
from consignment_engines.pending_payouts import PendingPayoutGroup, summarize_pending_payouts
from consignment_engines.periods import (
    PeriodActivity,
    PeriodWindows,
    bucket_transactions,
    month_period,
    period_windows,
)
from consignment_engines.split import SaleSplit, split_sale
from consignment_engines.statements import ConsignorStatement, compute_statement
from consignment_engines.tracer import traced_engine

__all__ = [
    # Ledger
    "LedgerSummary",
    "compute_ledger",
    # Periods
    "PeriodWindows",
    "PeriodActivity",
    "period_windows",
    "bucket_transactions",
    "month_period",
    # Items
    "ItemMetrics",
    "compute_item_metrics",
    # Consignor metrics
    "ConsignorMetrics",
    "compute_consignor_metrics",
    # Dashboard
    "ConsignorStanding",
    "DashboardSummary",
    "RANKING_KEYS",
    "compute_dashboard",
    "growth_rate",
    "rank_consignors",
    # Activity
    "ConsignorActivity",
    "compute_activity",
    # Pending payouts
    "PendingPayoutGroup",
    "summarize_pending_payouts",
    # Statements
    "ConsignorStatement",
    "compute_statement",
    # Sale split
    "SaleSplit",
    "split_sale",
    # Codes
    "CodeGenerator",
    # Tracer
    "traced_engine",
]
