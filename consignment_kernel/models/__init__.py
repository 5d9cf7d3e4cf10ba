"""ORM models for the consignment kernel."""

from consignment_kernel.models.consignor import ConsignorModel
from consignment_kernel.models.item import ItemModel
from consignment_kernel.models.payout import PayoutModel
from consignment_kernel.models.transaction import TransactionModel

__all__ = [
    "ConsignorModel",
    "ItemModel",
    "PayoutModel",
    "TransactionModel",
]
