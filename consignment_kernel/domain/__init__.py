"""Pure domain types: input records and the injectable clock."""

from consignment_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from consignment_kernel.domain.records import (
    ConsignorSnapshot,
    ConsignorStatus,
    ItemRecord,
    ItemStatus,
    PayoutRecord,
    TransactionRecord,
)

__all__ = [
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "ItemStatus",
    "ConsignorStatus",
    "ItemRecord",
    "TransactionRecord",
    "PayoutRecord",
    "ConsignorSnapshot",
]
