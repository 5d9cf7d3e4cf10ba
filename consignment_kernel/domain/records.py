"""
Records -- Immutable input snapshots for the ledger engines.

Responsibility:
    Frozen, typed views of the rows the persistence layer owns: consignor
    items, sale transactions, payouts and the consignor itself.  Selectors
    build these from ORM rows; engines consume them.  Nothing in this module
    performs I/O.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by engines, selectors and services.

Invariants enforced:
    - Records are frozen dataclasses; engines never mutate their inputs.
    - Monetary fields are ``Decimal``.  Values are accepted as given;
      range checks (``price >= 0`` and so on) belong to the layer that
      originates the rows.

Non-goals:
    - No "provider" variants.  The consignor is the single canonical
      entity; "provider" is only a synonym in user-facing text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID


class ItemStatus(str, Enum):
    """Lifecycle status of a consigned item (mutually exclusive)."""

    AVAILABLE = "available"
    SOLD = "sold"
    REMOVED = "removed"


class ConsignorStatus(str, Enum):
    """Account status of a consignor within an organization."""

    ACTIVE = "active"
    PENDING = "pending"
    DEACTIVATED = "deactivated"


@dataclass(frozen=True)
class ItemRecord:
    """A consigned item as of the snapshot."""

    id: UUID
    status: ItemStatus
    price: Decimal
    created_at: datetime
    title: str = ""


@dataclass(frozen=True)
class TransactionRecord:
    """
    A recorded sale of one item.

    ``payout_id`` of None means the consignor share has not yet been
    included in a payout.
    """

    id: UUID
    item_id: UUID
    consignor_id: UUID
    sale_date: datetime
    sale_price: Decimal
    consignor_amount: Decimal
    payout_id: UUID | None = None

    @property
    def is_paid_out(self) -> bool:
        return self.payout_id is not None


@dataclass(frozen=True)
class PayoutRecord:
    """
    A disbursement to a consignor.

    ``paid_at`` of None means the payout is scheduled but not yet disbursed.
    """

    id: UUID
    consignor_id: UUID
    amount: Decimal
    created_at: datetime
    paid_at: datetime | None = None
    payout_number: str = ""


@dataclass(frozen=True)
class ConsignorSnapshot:
    """
    A consignor together with every row the metrics engines need.

    Used by organization-wide computations (dashboard ranking) where the
    engine must iterate many consignors at once.
    """

    id: UUID
    display_name: str
    status: ConsignorStatus
    created_at: datetime
    consignor_number: str = ""
    commission_rate: Decimal = Decimal("0.5000")
    items: tuple[ItemRecord, ...] = field(default_factory=tuple)
    transactions: tuple[TransactionRecord, ...] = field(default_factory=tuple)
    payouts: tuple[PayoutRecord, ...] = field(default_factory=tuple)
