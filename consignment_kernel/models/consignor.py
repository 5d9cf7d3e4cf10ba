"""
Module: consignment_kernel.models.consignor
Responsibility: ORM persistence for consignors (the parties who supply items
    to a shop on commission; "provider" in older screens).
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - consignor_number is unique within an organization
      (uq_consignor_org_number).
    - Every row is tenant-scoped by organization_id; all selector queries
      filter on it.

Failure modes:
    - IntegrityError on a duplicate (organization_id, consignor_number).
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from consignment_kernel.db.base import TrackedBase, UUIDString
from consignment_kernel.domain.records import ConsignorStatus


class ConsignorModel(TrackedBase):
    """
    A consignor belonging to one organization.

    Non-goals:
        - Does not store balances.  Pending balance is always derived from
          transactions and payouts by the ledger engine.
    """

    __tablename__ = "consignors"

    __table_args__ = (
        UniqueConstraint(
            "organization_id", "consignor_number", name="uq_consignor_org_number"
        ),
        Index("idx_consignor_org_status", "organization_id", "status"),
    )

    organization_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        nullable=False,
    )

    # Auto-generated: PRV-00001
    consignor_number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # 0.5000 = 50%
    commission_rate: Mapped[Decimal] = mapped_column(
        nullable=False,
        default=Decimal("0.5000"),
    )

    status: Mapped[ConsignorStatus] = mapped_column(
        String(20),
        nullable=False,
        default=ConsignorStatus.ACTIVE,
    )

    status_changed_at: Mapped[datetime | None] = mapped_column(nullable=True)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Consignor {self.consignor_number}: {self.display_name}>"
