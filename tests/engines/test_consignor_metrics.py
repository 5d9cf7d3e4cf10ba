"""
Tests for the composed consignor metrics record.
"""

from datetime import datetime
from decimal import Decimal

from consignment_engines.consignor_metrics import (
    compute_consignor_metrics,
    latest_payout,
    latest_sale_date,
)
from consignment_kernel.domain.records import ItemStatus
from tests.factories import FIXED_NOW, make_item, make_payout, make_transaction, utc


class TestComputeConsignorMetrics:
    """End-to-end composition over a small consignor history."""

    def setup_method(self):
        self.sold_recent = make_item(ItemStatus.SOLD, "40.00", created_at=utc(2024, 1, 2))
        self.sold_december = make_item(ItemStatus.SOLD, "20.00", created_at=utc(2023, 12, 1))
        self.available = make_item(ItemStatus.AVAILABLE, "30.00", created_at=utc(2023, 11, 5))
        self.removed = make_item(ItemStatus.REMOVED, "10.00", created_at=utc(2023, 10, 1))
        self.items = [self.sold_recent, self.sold_december, self.available, self.removed]

        self.transactions = [
            make_transaction("20.00", sale_date=utc(2024, 1, 12), item_id=self.sold_recent.id),
            make_transaction("10.00", sale_date=utc(2023, 12, 11), item_id=self.sold_december.id),
        ]
        self.payouts = [
            make_payout("10.00", created_at=utc(2023, 12, 20), paid_at=utc(2023, 12, 21)),
            make_payout("5.00", created_at=utc(2024, 1, 13)),
        ]

    def _compute(self):
        return compute_consignor_metrics(
            self.items, self.transactions, self.payouts, now=FIXED_NOW
        )

    def test_item_counts(self):
        metrics = self._compute()

        assert metrics.total_items == 4
        assert metrics.available_items == 1
        assert metrics.sold_items == 2
        assert metrics.removed_items == 1
        assert metrics.inventory_value == Decimal("30.00")

    def test_ledger_figures(self):
        metrics = self._compute()

        assert metrics.total_earnings == Decimal("30.00")
        assert metrics.total_paid == Decimal("15.00")
        assert metrics.pending_balance == Decimal("15.00")

    def test_month_buckets(self):
        metrics = self._compute()

        assert metrics.earnings_this_month == Decimal("20.00")
        assert metrics.sales_this_month == 1
        assert metrics.earnings_last_month == Decimal("10.00")
        assert metrics.sales_last_month == 1

    def test_latest_sale_and_payout(self):
        metrics = self._compute()

        assert metrics.last_sale_date == utc(2024, 1, 12)
        assert metrics.last_payout_date == utc(2024, 1, 13)
        assert metrics.last_payout_amount == Decimal("5.00")

    def test_averages(self):
        metrics = self._compute()

        assert metrics.average_item_price == Decimal("25")
        # 10 days and 10 days
        assert metrics.average_days_to_sell == Decimal("10")

    def test_deterministic(self):
        assert self._compute() == self._compute()

    def test_to_dict_is_json_safe(self):
        payload = self._compute().to_dict()

        assert payload["pending_balance"] == "15.00"
        assert payload["last_sale_date"] == "2024-01-12T00:00:00+00:00"
        assert payload["total_items"] == 4
        assert len(payload) == 17

    def test_emits_trace_and_event(self, captured_logs):
        self._compute()

        messages = [r["message"] for r in captured_logs()]
        assert "consignor_metrics_computed" in messages
        traces = [
            r for r in captured_logs()
            if r["message"] == "CONSIGNMENT_ENGINE_TRACE"
            and r["engine_name"] == "consignor_metrics"
        ]
        assert len(traces) == 1


class TestEmptyConsignor:
    """A consignor with no history."""

    def test_all_zero(self):
        metrics = compute_consignor_metrics([], [], [], now=FIXED_NOW)

        assert metrics.total_items == 0
        assert metrics.pending_balance == Decimal("0")
        assert metrics.earnings_this_month == Decimal("0")
        assert metrics.last_sale_date is None
        assert metrics.last_payout_date is None
        assert metrics.last_payout_amount == Decimal("0")
        assert metrics.average_days_to_sell == Decimal("0")

    def test_to_dict_keeps_none(self):
        payload = compute_consignor_metrics([], [], [], now=FIXED_NOW).to_dict()

        assert payload["last_payout_date"] is None


class TestLatestHelpers:
    """Tests for latest_payout and latest_sale_date."""

    def test_latest_payout_by_created_at(self):
        older = make_payout("1.00", created_at=utc(2024, 1, 1), paid_at=utc(2024, 1, 20))
        newer = make_payout("2.00", created_at=utc(2024, 1, 10))

        assert latest_payout([older, newer]) is newer

    def test_latest_payout_tie_keeps_first(self):
        first = make_payout("1.00", created_at=utc(2024, 1, 1))
        second = make_payout("2.00", created_at=utc(2024, 1, 1))

        assert latest_payout([first, second]) is first

    def test_latest_payout_empty(self):
        assert latest_payout([]) is None

    def test_latest_sale_mixes_naive_and_aware(self):
        naive = make_transaction(sale_date=datetime(2024, 1, 9))
        aware = make_transaction(sale_date=utc(2024, 1, 8))

        assert latest_sale_date([aware, naive]) == datetime(2024, 1, 9)

    def test_latest_sale_empty(self):
        assert latest_sale_date([]) is None
