"""
Consignor query selector.

Provides read-only access to a consignor and the item, transaction and payout
rows the ledger engines consume.

Key design decisions:
- Returns frozen records from consignment_kernel.domain.records, not ORM rows
- Uses the caller's Session (snapshot per request)
- Every query filters by organization_id; consignor-level queries also filter
  by consignor_id, so rows from another tenant can never reach an engine
- Datetimes are normalized to aware UTC (SQLite drops tzinfo on round trip)
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from consignment_kernel.domain.clock import as_utc
from consignment_kernel.domain.records import (
    ConsignorSnapshot,
    ConsignorStatus,
    ItemRecord,
    ItemStatus,
    PayoutRecord,
    TransactionRecord,
)
from consignment_kernel.logging_config import get_logger
from consignment_kernel.models.consignor import ConsignorModel
from consignment_kernel.models.item import ItemModel
from consignment_kernel.models.payout import PayoutModel
from consignment_kernel.models.transaction import TransactionModel
from consignment_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.consignor")


def _as_utc(value: datetime | None) -> datetime | None:
    return None if value is None else as_utc(value)


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class ConsignorSelector(BaseSelector[ConsignorModel]):
    """
    Selector for consignor ledger queries.

    Returns records rather than ORM models for clean separation.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    # =========================================================================
    # Conversions
    # =========================================================================

    def _to_item(self, row: ItemModel) -> ItemRecord:
        return ItemRecord(
            id=row.id,
            status=ItemStatus(row.status),
            price=_as_decimal(row.price),
            created_at=_as_utc(row.created_at),
            title=row.title or "",
        )

    def _to_transaction(self, row: TransactionModel) -> TransactionRecord:
        return TransactionRecord(
            id=row.id,
            item_id=row.item_id,
            consignor_id=row.consignor_id,
            sale_date=_as_utc(row.sale_date),
            sale_price=_as_decimal(row.sale_price),
            consignor_amount=_as_decimal(row.consignor_amount),
            payout_id=row.payout_id,
        )

    def _to_payout(self, row: PayoutModel) -> PayoutRecord:
        return PayoutRecord(
            id=row.id,
            consignor_id=row.consignor_id,
            amount=_as_decimal(row.amount),
            created_at=_as_utc(row.created_at),
            paid_at=_as_utc(row.paid_at),
            payout_number=row.payout_number,
        )

    # =========================================================================
    # Consignor Queries
    # =========================================================================

    def exists(self, organization_id: UUID, consignor_id: UUID) -> bool:
        """True if the consignor belongs to the organization."""
        found = self.session.execute(
            select(ConsignorModel.id).where(
                ConsignorModel.id == consignor_id,
                ConsignorModel.organization_id == organization_id,
            )
        ).scalar_one_or_none()
        return found is not None

    def get_consignor(
        self,
        organization_id: UUID,
        consignor_id: UUID,
        include_ledger: bool = True,
    ) -> ConsignorSnapshot | None:
        """
        Get a consignor snapshot.

        Args:
            organization_id: Tenant scope.
            consignor_id: Consignor ID.
            include_ledger: Load items, transactions and payouts as well.

        Returns:
            ConsignorSnapshot if found in the organization, None otherwise.
        """
        row = self.session.execute(
            select(ConsignorModel).where(
                ConsignorModel.id == consignor_id,
                ConsignorModel.organization_id == organization_id,
            )
        ).scalar_one_or_none()

        if row is None:
            return None

        return self._to_snapshot(row, include_ledger=include_ledger)

    def list_consignors(
        self,
        organization_id: UUID,
        status: ConsignorStatus | None = None,
        include_ledger: bool = True,
    ) -> list[ConsignorSnapshot]:
        """
        List consignors of an organization ordered by consignor number.

        Args:
            organization_id: Tenant scope.
            status: Optional status filter.
            include_ledger: Load items, transactions and payouts as well.
        """
        query = (
            select(ConsignorModel)
            .where(ConsignorModel.organization_id == organization_id)
            .order_by(ConsignorModel.consignor_number)
        )

        if status is not None:
            query = query.where(ConsignorModel.status == status.value)

        rows = self.session.execute(query).scalars().all()
        logger.debug("consignors_listed", extra={
            "organization_id": str(organization_id),
            "status": status.value if status else None,
            "count": len(rows),
        })
        return [self._to_snapshot(r, include_ledger=include_ledger) for r in rows]

    def _to_snapshot(
        self, row: ConsignorModel, include_ledger: bool
    ) -> ConsignorSnapshot:
        items: tuple[ItemRecord, ...] = ()
        transactions: tuple[TransactionRecord, ...] = ()
        payouts: tuple[PayoutRecord, ...] = ()
        if include_ledger:
            items = tuple(self.items_for(row.organization_id, row.id))
            transactions = tuple(self.transactions_for(row.organization_id, row.id))
            payouts = tuple(self.payouts_for(row.organization_id, row.id))

        return ConsignorSnapshot(
            id=row.id,
            display_name=row.display_name,
            status=ConsignorStatus(row.status),
            created_at=_as_utc(row.created_at),
            consignor_number=row.consignor_number,
            commission_rate=_as_decimal(row.commission_rate),
            items=items,
            transactions=transactions,
            payouts=payouts,
        )

    # =========================================================================
    # Ledger Queries
    # =========================================================================

    def items_for(self, organization_id: UUID, consignor_id: UUID) -> list[ItemRecord]:
        """All items of a consignor, oldest first."""
        rows = self.session.execute(
            select(ItemModel)
            .where(
                ItemModel.organization_id == organization_id,
                ItemModel.consignor_id == consignor_id,
            )
            .order_by(ItemModel.created_at)
        ).scalars().all()
        return [self._to_item(r) for r in rows]

    def transactions_for(
        self,
        organization_id: UUID,
        consignor_id: UUID | None = None,
        unpaid_only: bool = False,
    ) -> list[TransactionRecord]:
        """
        Sale transactions, oldest first.

        Args:
            organization_id: Tenant scope.
            consignor_id: Restrict to one consignor (None = whole organization).
            unpaid_only: Only transactions not yet attached to a payout.
        """
        query = (
            select(TransactionModel)
            .where(TransactionModel.organization_id == organization_id)
            .order_by(TransactionModel.sale_date)
        )

        if consignor_id is not None:
            query = query.where(TransactionModel.consignor_id == consignor_id)

        if unpaid_only:
            query = query.where(TransactionModel.payout_id.is_(None))

        rows = self.session.execute(query).scalars().all()
        return [self._to_transaction(r) for r in rows]

    def payouts_for(self, organization_id: UUID, consignor_id: UUID) -> list[PayoutRecord]:
        """All payouts of a consignor, oldest first."""
        rows = self.session.execute(
            select(PayoutModel)
            .where(
                PayoutModel.organization_id == organization_id,
                PayoutModel.consignor_id == consignor_id,
            )
            .order_by(PayoutModel.created_at)
        ).scalars().all()
        return [self._to_payout(r) for r in rows]

    def consignor_numbers(self, organization_id: UUID) -> list[str]:
        """Every consignor number in use within the organization."""
        return list(
            self.session.execute(
                select(ConsignorModel.consignor_number).where(
                    ConsignorModel.organization_id == organization_id
                )
            ).scalars().all()
        )

    def payout_numbers(self, organization_id: UUID, prefix: str = "") -> list[str]:
        """Payout numbers in use within the organization, optionally by prefix."""
        query = select(PayoutModel.payout_number).where(
            PayoutModel.organization_id == organization_id
        )
        if prefix:
            query = query.where(PayoutModel.payout_number.startswith(prefix))
        return list(self.session.execute(query).scalars().all())
