"""Tests for the consignor activity window."""

from datetime import timedelta
from uuid import uuid4

import pytest

from consignment_engines.activity import compute_activity
from tests.factories import FIXED_NOW, make_item, make_payout, make_transaction, utc


class TestComputeActivity:

    def setup_method(self):
        self.consignor_id = uuid4()

    def test_filters_to_window(self):
        recent = make_transaction(sale_date=utc(2024, 1, 10))
        old = make_transaction(sale_date=utc(2023, 11, 1))

        activity = compute_activity(
            self.consignor_id, [], [recent, old], [], now=FIXED_NOW, days=30
        )

        assert activity.transactions == (recent,)
        assert activity.total_transactions == 1
        assert activity.cutoff == FIXED_NOW - timedelta(days=30)

    def test_cutoff_is_inclusive(self):
        on_cutoff = make_item(created_at=FIXED_NOW - timedelta(days=7))
        just_before = make_item(created_at=FIXED_NOW - timedelta(days=7, seconds=1))

        activity = compute_activity(
            self.consignor_id, [on_cutoff, just_before], [], [], now=FIXED_NOW, days=7
        )

        assert activity.items == (on_cutoff,)
        assert activity.total_items_added == 1

    def test_sorted_newest_first(self):
        payouts = [
            make_payout(created_at=utc(2024, 1, 2)),
            make_payout(created_at=utc(2024, 1, 14)),
            make_payout(created_at=utc(2024, 1, 8)),
        ]

        activity = compute_activity(self.consignor_id, [], [], payouts, now=FIXED_NOW)

        assert [p.created_at.day for p in activity.payouts] == [14, 8, 2]
        assert activity.total_payouts == 3

    def test_empty(self):
        activity = compute_activity(self.consignor_id, [], [], [], now=FIXED_NOW)

        assert activity.consignor_id == self.consignor_id
        assert activity.days == 30
        assert activity.total_transactions == 0

    @pytest.mark.parametrize("days", [0, -5])
    def test_non_positive_days_rejected(self, days):
        with pytest.raises(ValueError):
            compute_activity(self.consignor_id, [], [], [], now=FIXED_NOW, days=days)
