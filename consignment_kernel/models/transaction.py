"""
Module: consignment_kernel.models.transaction
Responsibility: ORM persistence for item sales and their shop/consignor split.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants (enforced by the recording layer, not here):
    - 0 <= consignor_amount <= sale_price.
    - payout_id is NULL until the consignor share is included in a payout.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from consignment_kernel.db.base import TrackedBase, UUIDString


class TransactionModel(TrackedBase):
    """A recorded sale of one item."""

    __tablename__ = "transactions"

    __table_args__ = (
        Index("idx_txn_org_consignor", "organization_id", "consignor_id"),
        Index("idx_txn_sale_date", "sale_date"),
        Index("idx_txn_payout", "payout_id"),
    )

    organization_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)

    item_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("items.id"),
        nullable=False,
    )

    consignor_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("consignors.id"),
        nullable=False,
    )

    sale_date: Mapped[datetime] = mapped_column(nullable=False)

    sale_price: Mapped[Decimal] = mapped_column(nullable=False)

    consignor_amount: Mapped[Decimal] = mapped_column(nullable=False)

    shop_amount: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    # Cash, Card, Online
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)

    payout_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("payouts.id"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Transaction {self.id}: {self.sale_price} on {self.sale_date}>"
