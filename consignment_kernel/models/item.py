"""
Module: consignment_kernel.models.item
Responsibility: ORM persistence for consigned inventory items.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from consignment_kernel.db.base import TrackedBase, UUIDString
from consignment_kernel.domain.records import ItemStatus


class ItemModel(TrackedBase):
    """An item a consignor has placed with the shop."""

    __tablename__ = "items"

    __table_args__ = (
        Index("idx_item_org_consignor", "organization_id", "consignor_id"),
        Index("idx_item_status", "status"),
    )

    organization_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)

    consignor_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("consignors.id"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    price: Mapped[Decimal] = mapped_column(nullable=False)

    status: Mapped[ItemStatus] = mapped_column(
        String(20),
        nullable=False,
        default=ItemStatus.AVAILABLE,
    )

    def __repr__(self) -> str:
        return f"<Item {self.id}: {self.title} [{self.status}]>"
