"""Read-only selectors returning frozen domain records."""

from consignment_kernel.selectors.base import BaseSelector
from consignment_kernel.selectors.consignor_selector import ConsignorSelector

__all__ = ["BaseSelector", "ConsignorSelector"]
