"""Services: orchestration of selectors and engines for consignor screens."""

from consignment_services.identifier_service import IdentifierService
from consignment_services.metrics_service import ConsignorMetricsService

__all__ = ["ConsignorMetricsService", "IdentifierService"]
