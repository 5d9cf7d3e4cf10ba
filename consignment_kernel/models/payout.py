"""
Module: consignment_kernel.models.payout
Responsibility: ORM persistence for disbursements to consignors.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - payout_number is unique within an organization (uq_payout_org_number).
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from consignment_kernel.db.base import TrackedBase, UUIDString


class PayoutModel(TrackedBase):
    """A payout to one consignor covering one or more transactions."""

    __tablename__ = "payouts"

    __table_args__ = (
        UniqueConstraint("organization_id", "payout_number", name="uq_payout_org_number"),
        Index("idx_payout_org_consignor", "organization_id", "consignor_id"),
    )

    organization_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)

    consignor_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("consignors.id"),
        nullable=False,
    )

    # PO{yyyymmdd}{nnn}
    payout_number: Mapped[str] = mapped_column(String(50), nullable=False)

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    # NULL while the payout is only scheduled
    paid_at: Mapped[datetime | None] = mapped_column(nullable=True)

    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<Payout {self.payout_number}: {self.amount}>"
