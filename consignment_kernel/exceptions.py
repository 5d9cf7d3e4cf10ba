"""
Typed exception hierarchy for the consignment kernel.

Every error carries a class-level ``code`` (machine-readable, API-safe) and
keeps its context as attributes rather than inside the message, so callers
catch by type and presentation layers can serialize the structured fields.

    ConsignmentError (base)
    |
    +-- ConsignorError
    |   +-- ConsignorNotFoundError
    |
    +-- RankingError
    |   +-- UnknownRankingKeyError
    |
    +-- ConfigurationError

Code                    | When Raised
------------------------|--------------------------------------------------
CONSIGNOR_NOT_FOUND     | Consignor id does not exist in the organization
UNKNOWN_RANKING_KEY     | Dashboard ranking requested on an unsupported field
CONFIGURATION_ERROR     | Settings file holds an invalid value

The ledger and metrics engines never raise these: they are total over their
inputs.  These exceptions belong to the service, selector and config layers.
"""


class ConsignmentError(Exception):
    """
    Base exception for all consignment kernel errors.

    All subclasses must define a ``code`` class attribute.
    """

    code: str = "CONSIGNMENT_ERROR"


# Consignor exceptions


class ConsignorError(ConsignmentError):
    """Base exception for consignor lookup errors."""

    code: str = "CONSIGNOR_ERROR"


class ConsignorNotFoundError(ConsignorError):
    """Consignor does not exist within the requesting organization."""

    code: str = "CONSIGNOR_NOT_FOUND"

    def __init__(self, consignor_id: str, organization_id: str):
        self.consignor_id = consignor_id
        self.organization_id = organization_id
        super().__init__(
            f"Consignor not found: {consignor_id} "
            f"(organization {organization_id})"
        )


# Ranking exceptions


class RankingError(ConsignmentError):
    """Base exception for dashboard ranking errors."""

    code: str = "RANKING_ERROR"


class UnknownRankingKeyError(RankingError):
    """Ranking requested on a field that has no registered key function."""

    code: str = "UNKNOWN_RANKING_KEY"

    def __init__(self, key: str, allowed: tuple[str, ...]):
        self.key = key
        self.allowed = allowed
        super().__init__(
            f"Unknown ranking key: {key!r} (allowed: {', '.join(allowed)})"
        )


# Configuration exceptions


class ConfigurationError(ConsignmentError):
    """A settings value failed validation."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid setting {field}={value!r}: {reason}")
