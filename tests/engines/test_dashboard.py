"""
Tests for the organization dashboard and consignor ranking.
"""

from decimal import Decimal
from uuid import UUID

import pytest

from consignment_engines.dashboard import (
    ConsignorStanding,
    compute_dashboard,
    growth_rate,
    rank_consignors,
)
from consignment_kernel.domain.records import ConsignorStatus, ItemStatus
from consignment_kernel.exceptions import UnknownRankingKeyError
from tests.factories import (
    FIXED_NOW,
    make_item,
    make_payout,
    make_snapshot,
    make_transaction,
    utc,
)


def _standing(name, pending="0", earnings="0", active=0, total=0, n=1):
    return ConsignorStanding(
        consignor_id=UUID(int=n),
        display_name=name,
        pending_balance=Decimal(pending),
        total_earnings=Decimal(earnings),
        active_items=active,
        total_items=total,
    )


def _owed(name, amount, status=ConsignorStatus.ACTIVE, created_at=None):
    return make_snapshot(
        name,
        status=status,
        created_at=created_at,
        transactions=(make_transaction(amount),),
    )


class TestGrowthRate:
    def test_growth(self):
        assert growth_rate(3, 2) == Decimal("50.00")

    def test_decline(self):
        assert growth_rate(1, 4) == Decimal("-75.00")

    def test_no_previous_is_zero(self):
        assert growth_rate(7, 0) == Decimal("0")

    def test_rounds_to_two_places(self):
        assert growth_rate(1, 3) == Decimal("-66.67")


class TestRankConsignors:
    """Tests for rank_consignors."""

    def test_descending_by_pending_balance(self):
        standings = [
            _standing("Ann", pending="5", n=1),
            _standing("Bob", pending="50", n=2),
            _standing("Cy", pending="20", n=3),
        ]

        ranked = rank_consignors(standings)

        assert [s.display_name for s in ranked] == ["Bob", "Cy", "Ann"]

    def test_ties_broken_by_name_then_id(self):
        standings = [
            _standing("zed", pending="10", n=1),
            _standing("Amy", pending="10", n=3),
            _standing("Amy", pending="10", n=2),
        ]

        ranked = rank_consignors(standings)

        assert [(s.display_name, s.consignor_id.int) for s in ranked] == [
            ("Amy", 2),
            ("Amy", 3),
            ("zed", 1),
        ]

    def test_ascending_by_name_is_case_insensitive(self):
        standings = [_standing("bob", n=1), _standing("Alice", n=2), _standing("carl", n=3)]

        ranked = rank_consignors(standings, key="display_name", descending=False)

        assert [s.display_name for s in ranked] == ["Alice", "bob", "carl"]

    def test_limit(self):
        standings = [_standing(f"C{i}", pending=str(i), n=i) for i in range(1, 10)]

        ranked = rank_consignors(standings, limit=3)

        assert [s.pending_balance for s in ranked] == [Decimal(9), Decimal(8), Decimal(7)]

    def test_rank_by_active_items(self):
        standings = [_standing("A", active=1, n=1), _standing("B", active=4, n=2)]

        ranked = rank_consignors(standings, key="active_items")

        assert ranked[0].display_name == "B"

    def test_unknown_key_raises(self):
        with pytest.raises(UnknownRankingKeyError) as exc_info:
            rank_consignors([], key="shoe_size")

        assert exc_info.value.key == "shoe_size"
        assert "pending_balance" in exc_info.value.allowed
        assert exc_info.value.code == "UNKNOWN_RANKING_KEY"


class TestConsignorStanding:
    def test_from_snapshot(self):
        snapshot = make_snapshot(
            "Dana",
            items=(
                make_item(ItemStatus.AVAILABLE),
                make_item(ItemStatus.AVAILABLE),
                make_item(ItemStatus.SOLD),
            ),
            transactions=(make_transaction("30.00"),),
            payouts=(make_payout("12.00"),),
        )

        standing = ConsignorStanding.from_snapshot(snapshot)

        assert standing.consignor_id == snapshot.id
        assert standing.pending_balance == Decimal("18.00")
        assert standing.total_earnings == Decimal("30.00")
        assert standing.active_items == 2
        assert standing.total_items == 3


class TestComputeDashboard:
    """Tests for compute_dashboard."""

    def test_status_counts(self):
        consignors = [
            make_snapshot("A", status=ConsignorStatus.ACTIVE),
            make_snapshot("B", status=ConsignorStatus.ACTIVE),
            make_snapshot("C", status=ConsignorStatus.PENDING),
            make_snapshot("D", status=ConsignorStatus.DEACTIVATED),
        ]

        summary = compute_dashboard(consignors, now=FIXED_NOW)

        assert summary.total_consignors == 4
        assert summary.active_consignors == 2
        assert summary.pending_consignors == 1
        assert summary.deactivated_consignors == 1

    def test_new_consignors_and_growth(self):
        consignors = [
            make_snapshot("A", created_at=utc(2024, 1, 2)),
            make_snapshot("B", created_at=utc(2024, 1, 14)),
            make_snapshot("C", created_at=utc(2024, 1, 1)),
            make_snapshot("D", created_at=utc(2023, 12, 31, 23, 59)),
            make_snapshot("E", created_at=utc(2023, 12, 1)),
            make_snapshot("F", created_at=utc(2023, 11, 30)),
        ]

        summary = compute_dashboard(consignors, now=FIXED_NOW)

        assert summary.new_this_month == 3
        assert summary.new_last_month == 2
        assert summary.growth_rate == Decimal("50.00")

    def test_growth_zero_without_last_month(self):
        summary = compute_dashboard(
            [make_snapshot("A", created_at=utc(2024, 1, 3))], now=FIXED_NOW
        )

        assert summary.new_last_month == 0
        assert summary.growth_rate == Decimal("0")

    def test_top_ranks_whole_active_set_before_truncating(self):
        """The highest balance is found even when it is listed last."""
        consignors = [_owed(f"C{i}", f"{i}.00") for i in range(1, 8)]
        consignors.append(_owed("Whale", "500.00"))

        summary = compute_dashboard(consignors, now=FIXED_NOW, top_n=3)

        assert [s.display_name for s in summary.top_by_balance] == ["Whale", "C7", "C6"]

    def test_top_excludes_inactive_consignors(self):
        consignors = [
            _owed("Active", "5.00"),
            _owed("Pending", "900.00", status=ConsignorStatus.PENDING),
            _owed("Gone", "800.00", status=ConsignorStatus.DEACTIVATED),
        ]

        summary = compute_dashboard(consignors, now=FIXED_NOW)

        assert [s.display_name for s in summary.top_by_balance] == ["Active"]

    def test_top_n_zero(self):
        summary = compute_dashboard([_owed("A", "1.00")], now=FIXED_NOW, top_n=0)

        assert summary.top_by_balance == ()

    def test_negative_top_n_rejected(self):
        with pytest.raises(ValueError):
            compute_dashboard([], now=FIXED_NOW, top_n=-1)

    def test_empty_organization(self):
        summary = compute_dashboard([], now=FIXED_NOW)

        assert summary.total_consignors == 0
        assert summary.top_by_balance == ()
        assert summary.growth_rate == Decimal("0")
