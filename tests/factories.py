"""Record factories, ORM seeders and constants shared across the test suite."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from consignment_kernel.domain.records import (
    ConsignorSnapshot,
    ConsignorStatus,
    ItemRecord,
    ItemStatus,
    PayoutRecord,
    TransactionRecord,
)
from consignment_kernel.models import ConsignorModel, ItemModel, PayoutModel, TransactionModel

TEST_ORG_ID = UUID("00000000-0000-0000-0000-0000000000a1")
OTHER_ORG_ID = UUID("00000000-0000-0000-0000-0000000000b2")


def utc(*args: int) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


FIXED_NOW = utc(2024, 1, 15, 12, 0, 0)


def make_item(
    status: ItemStatus = ItemStatus.AVAILABLE,
    price: str | Decimal = "10.00",
    created_at: datetime | None = None,
    item_id: UUID | None = None,
) -> ItemRecord:
    return ItemRecord(
        id=item_id or uuid4(),
        status=status,
        price=Decimal(str(price)),
        created_at=created_at or utc(2024, 1, 1),
    )


def make_transaction(
    consignor_amount: str | Decimal = "5.00",
    sale_date: datetime | None = None,
    item_id: UUID | None = None,
    consignor_id: UUID | None = None,
    sale_price: str | Decimal | None = None,
    payout_id: UUID | None = None,
) -> TransactionRecord:
    amount = Decimal(str(consignor_amount))
    return TransactionRecord(
        id=uuid4(),
        item_id=item_id or uuid4(),
        consignor_id=consignor_id or uuid4(),
        sale_date=sale_date or utc(2024, 1, 10),
        sale_price=Decimal(str(sale_price)) if sale_price is not None else amount * 2,
        consignor_amount=amount,
        payout_id=payout_id,
    )


def make_payout(
    amount: str | Decimal = "5.00",
    created_at: datetime | None = None,
    paid_at: datetime | None = None,
    consignor_id: UUID | None = None,
) -> PayoutRecord:
    return PayoutRecord(
        id=uuid4(),
        consignor_id=consignor_id or uuid4(),
        amount=Decimal(str(amount)),
        created_at=created_at or utc(2024, 1, 5),
        paid_at=paid_at,
    )


def make_snapshot(
    display_name: str,
    status: ConsignorStatus = ConsignorStatus.ACTIVE,
    created_at: datetime | None = None,
    items: tuple[ItemRecord, ...] = (),
    transactions: tuple[TransactionRecord, ...] = (),
    payouts: tuple[PayoutRecord, ...] = (),
) -> ConsignorSnapshot:
    return ConsignorSnapshot(
        id=uuid4(),
        display_name=display_name,
        status=status,
        created_at=created_at or utc(2023, 6, 1),
        items=items,
        transactions=transactions,
        payouts=payouts,
    )


# =============================================================================
# ORM seeding (database-backed tests)
# =============================================================================


def seed_consignor(
    session,
    organization_id: UUID = TEST_ORG_ID,
    consignor_number: str = "PRV-00001",
    first_name: str = "Ada",
    last_name: str = "Lovelace",
    status: ConsignorStatus = ConsignorStatus.ACTIVE,
    created_at: datetime | None = None,
    commission_rate: str = "0.5000",
):
    row = ConsignorModel(
        organization_id=organization_id,
        consignor_number=consignor_number,
        first_name=first_name,
        last_name=last_name,
        status=status.value,
        created_at=created_at or utc(2023, 6, 1),
        commission_rate=Decimal(commission_rate),
    )
    session.add(row)
    session.flush()
    return row


def seed_item(
    session,
    consignor,
    status: ItemStatus = ItemStatus.AVAILABLE,
    price: str = "10.00",
    created_at: datetime | None = None,
    title: str = "Wool coat",
):
    row = ItemModel(
        organization_id=consignor.organization_id,
        consignor_id=consignor.id,
        title=title,
        price=Decimal(price),
        status=status.value,
        created_at=created_at or utc(2024, 1, 1),
    )
    session.add(row)
    session.flush()
    return row


def seed_payout(
    session,
    consignor,
    amount: str = "5.00",
    payout_number: str = "PO20240105001",
    created_at: datetime | None = None,
    paid_at: datetime | None = None,
):
    row = PayoutModel(
        organization_id=consignor.organization_id,
        consignor_id=consignor.id,
        payout_number=payout_number,
        amount=Decimal(amount),
        created_at=created_at or utc(2024, 1, 5),
        paid_at=paid_at,
    )
    session.add(row)
    session.flush()
    return row


def seed_transaction(
    session,
    consignor,
    item,
    consignor_amount: str = "5.00",
    sale_date: datetime | None = None,
    payout=None,
    sale_price: str | None = None,
):
    amount = Decimal(consignor_amount)
    price = Decimal(sale_price) if sale_price is not None else amount * 2
    row = TransactionModel(
        organization_id=consignor.organization_id,
        item_id=item.id,
        consignor_id=consignor.id,
        sale_date=sale_date or utc(2024, 1, 10),
        sale_price=price,
        consignor_amount=amount,
        shop_amount=price - amount,
        payout_id=payout.id if payout is not None else None,
    )
    session.add(row)
    session.flush()
    return row
