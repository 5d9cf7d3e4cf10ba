"""
consignment_services.metrics_service -- Consignor metrics orchestration.

Responsibility:
    Load a consignor's rows through ConsignorSelector, run the pure engines,
    and return their frozen results.  This is the one place the metrics
    computation is wired to storage, so every screen (consignor detail,
    approval queue, dashboard) goes through the same code path.

Architecture position:
    Services -- orchestration over engines + kernel.
    Receives Session, Clock and MetricsSettings via constructor injection.

Invariants enforced:
    - Tenant isolation: every lookup is scoped by organization_id.
    - Time comes from the injected Clock, never datetime.now().
    - Each call reads a fresh snapshot; nothing is cached between calls.

Failure modes:
    - ConsignorNotFoundError when the consignor is not in the organization.
    - ValueError from compute_activity for a non-positive day window, from
      month_period for an invalid month, and from split_sale for a negative
      sale price.
"""

from __future__ import annotations

import time
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from consignment_config.schema import MetricsSettings
from consignment_engines.activity import ConsignorActivity, compute_activity
from consignment_engines.consignor_metrics import ConsignorMetrics, compute_consignor_metrics
from consignment_engines.dashboard import DashboardSummary, compute_dashboard
from consignment_engines.ledger import LedgerSummary, compute_ledger
from consignment_engines.pending_payouts import PendingPayoutGroup, summarize_pending_payouts
from consignment_engines.periods import month_period
from consignment_engines.split import SaleSplit, split_sale
from consignment_engines.statements import ConsignorStatement, compute_statement
from consignment_kernel.domain.clock import Clock, SystemClock
from consignment_kernel.domain.records import ConsignorSnapshot, ConsignorStatus
from consignment_kernel.exceptions import ConsignorNotFoundError
from consignment_kernel.logging_config import LogContext, get_logger
from consignment_kernel.selectors.consignor_selector import ConsignorSelector

logger = get_logger("services.metrics")


class ConsignorMetricsService:
    """
    Read-side service for consignor balances and dashboards.

    Contract:
        Session lifecycle belongs to the caller.  The service never
        commits, flushes or writes.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        settings: MetricsSettings | None = None,
    ):
        self._selector = ConsignorSelector(session)
        self._clock = clock or SystemClock()
        self._settings = settings or MetricsSettings()

    def _load(self, organization_id: UUID, consignor_id: UUID) -> ConsignorSnapshot:
        snapshot = self._selector.get_consignor(organization_id, consignor_id)
        if snapshot is None:
            logger.warning("consignor_not_found")
            raise ConsignorNotFoundError(str(consignor_id), str(organization_id))
        return snapshot

    def get_metrics(self, organization_id: UUID, consignor_id: UUID) -> ConsignorMetrics:
        """
        Full metrics record for one consignor.

        Raises:
            ConsignorNotFoundError: If the consignor is not in the organization.
        """
        with LogContext.bind(
            organization_id=str(organization_id), consignor_id=str(consignor_id)
        ):
            t0 = time.monotonic()
            snapshot = self._load(organization_id, consignor_id)
            metrics = compute_consignor_metrics(
                snapshot.items,
                snapshot.transactions,
                snapshot.payouts,
                now=self._clock.now_utc(),
            )
            logger.info("consignor_metrics_served", extra={
                "currency": self._settings.currency,
                "duration_ms": round((time.monotonic() - t0) * 1000, 2),
            })
            return metrics

    def get_ledger(self, organization_id: UUID, consignor_id: UUID) -> LedgerSummary:
        """
        Earnings, payouts and pending balance for one consignor.

        Raises:
            ConsignorNotFoundError: If the consignor is not in the organization.
        """
        with LogContext.bind(
            organization_id=str(organization_id), consignor_id=str(consignor_id)
        ):
            if not self._selector.exists(organization_id, consignor_id):
                logger.warning("consignor_not_found")
                raise ConsignorNotFoundError(str(consignor_id), str(organization_id))
            return compute_ledger(
                self._selector.transactions_for(organization_id, consignor_id),
                self._selector.payouts_for(organization_id, consignor_id),
            )

    def get_pending_balance(self, organization_id: UUID, consignor_id: UUID) -> Decimal:
        """Amount still owed to the consignor (may be negative)."""
        return self.get_ledger(organization_id, consignor_id).pending_balance

    def get_dashboard(
        self,
        organization_id: UUID,
        top_n: int | None = None,
    ) -> DashboardSummary:
        """Organization consignor dashboard."""
        with LogContext.bind(organization_id=str(organization_id)):
            consignors = self._selector.list_consignors(organization_id)
            return compute_dashboard(
                consignors,
                now=self._clock.now_utc(),
                top_n=top_n if top_n is not None else self._settings.top_consignor_count,
            )

    def get_activity(
        self,
        organization_id: UUID,
        consignor_id: UUID,
        days: int | None = None,
    ) -> ConsignorActivity:
        """
        Recent activity of one consignor.

        Raises:
            ConsignorNotFoundError: If the consignor is not in the organization.
            ValueError: If days is not positive.
        """
        with LogContext.bind(
            organization_id=str(organization_id), consignor_id=str(consignor_id)
        ):
            snapshot = self._load(organization_id, consignor_id)
            return compute_activity(
                snapshot.id,
                snapshot.items,
                snapshot.transactions,
                snapshot.payouts,
                now=self._clock.now_utc(),
                days=days if days is not None else self._settings.activity_days,
            )

    def get_pending_payouts(
        self,
        organization_id: UUID,
        consignor_id: UUID | None = None,
        minimum_amount: Decimal | None = None,
        period_end_before: datetime | None = None,
    ) -> tuple[PendingPayoutGroup, ...]:
        """
        Unpaid consignor shares grouped by consignor.

        ``minimum_amount`` defaults to the configured minimum payout amount.
        """
        with LogContext.bind(organization_id=str(organization_id)):
            transactions = self._selector.transactions_for(
                organization_id, consignor_id, unpaid_only=True
            )
            if minimum_amount is None:
                minimum_amount = self._settings.minimum_payout_amount
            return summarize_pending_payouts(
                transactions,
                minimum_amount=minimum_amount,
                period_end_before=period_end_before,
            )

    def get_statement(
        self,
        organization_id: UUID,
        consignor_id: UUID,
        year: int,
        month: int,
    ) -> ConsignorStatement:
        """
        Monthly statement for one consignor, opening balance carried from
        every earlier sale and payout.

        Raises:
            ConsignorNotFoundError: If the consignor is not in the organization.
            ValueError: If month is outside 1..12.
        """
        with LogContext.bind(
            organization_id=str(organization_id), consignor_id=str(consignor_id)
        ):
            period_start, period_end = month_period(year, month)
            snapshot = self._load(organization_id, consignor_id)
            statement = compute_statement(
                snapshot.transactions,
                snapshot.payouts,
                period_start,
                period_end,
                consignor_id=snapshot.id,
            )
            logger.info("consignor_statement_served", extra={
                "statement_number": statement.statement_number,
                "closing_balance": str(statement.closing_balance),
                "currency": self._settings.currency,
            })
            return statement

    def get_statements_for_month(
        self,
        organization_id: UUID,
        year: int,
        month: int,
    ) -> list[ConsignorStatement]:
        """Statements of every active consignor, in consignor number order."""
        with LogContext.bind(organization_id=str(organization_id)):
            period_start, period_end = month_period(year, month)
            consignors = self._selector.list_consignors(
                organization_id, status=ConsignorStatus.ACTIVE
            )
            statements = [
                compute_statement(
                    c.transactions, c.payouts, period_start, period_end, consignor_id=c.id
                )
                for c in consignors
            ]
            logger.info("monthly_statements_served", extra={
                "period_start": period_start.isoformat(),
                "consignor_count": len(statements),
            })
            return statements

    def get_sale_split(
        self,
        organization_id: UUID,
        consignor_id: UUID,
        sale_price: Decimal,
    ) -> SaleSplit:
        """
        Divide a sale price at the consignor's commission rate.

        Raises:
            ConsignorNotFoundError: If the consignor is not in the organization.
        """
        with LogContext.bind(
            organization_id=str(organization_id), consignor_id=str(consignor_id)
        ):
            snapshot = self._selector.get_consignor(
                organization_id, consignor_id, include_ledger=False
            )
            if snapshot is None:
                logger.warning("consignor_not_found")
                raise ConsignorNotFoundError(str(consignor_id), str(organization_id))
            return split_sale(sale_price, snapshot.commission_rate)
