"""
consignment_services.identifier_service -- Allocation of consignor and payout numbers.

Responsibility:
    Feed the numbers already in use (read through ConsignorSelector) into
    the pure CodeGenerator and hand back the next identifier.

Architecture position:
    Services -- orchestration over engines + kernel.

Non-goals:
    - Does not reserve numbers.  Two concurrent callers can receive the
      same candidate; the unique constraints on consignors and payouts
      reject the second insert and the caller retries.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from consignment_config.schema import MetricsSettings
from consignment_engines.codes import CodeGenerator
from consignment_kernel.domain.clock import Clock, SystemClock
from consignment_kernel.logging_config import get_logger
from consignment_kernel.selectors.consignor_selector import ConsignorSelector

logger = get_logger("services.identifiers")


class IdentifierService:
    """Next-number allocation scoped to one organization."""

    def __init__(
        self,
        session: Session,
        generator: CodeGenerator | None = None,
        clock: Clock | None = None,
        settings: MetricsSettings | None = None,
    ):
        self._selector = ConsignorSelector(session)
        self._settings = settings or MetricsSettings()
        self._generator = generator or CodeGenerator(
            consignor_prefix=self._settings.consignor_number_prefix
        )
        self._clock = clock or SystemClock()

    def next_consignor_number(self, organization_id: UUID) -> str:
        number = self._generator.next_consignor_number(
            self._selector.consignor_numbers(organization_id)
        )
        logger.info("consignor_number_allocated", extra={
            "organization_id": str(organization_id),
            "consignor_number": number,
        })
        return number

    def next_payout_number(self, organization_id: UUID) -> str:
        today = self._clock.today()
        prefix = f"PO{today:%Y%m%d}"
        number = self._generator.next_payout_number(
            self._selector.payout_numbers(organization_id, prefix=prefix),
            today,
        )
        logger.info("payout_number_allocated", extra={
            "organization_id": str(organization_id),
            "payout_number": number,
        })
        return number

    def invite_code(self) -> str:
        return self._generator.invite_code(self._settings.invite_code_length)
