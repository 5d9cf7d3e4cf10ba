"""
Module: consignment_engines.codes
Responsibility:
    Generate human-facing identifiers: sequential consignor numbers
    (PRV-00001), dated payout numbers (PO20240115001), random invite codes
    and 4-digit store codes.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Existing codes and "is
    this code taken" checks are supplied by the caller.

Invariants enforced:
    - Randomness comes only from the ``random.Random`` instance handed to
      CodeGenerator; there is no module-level random state.  The same seed
      reproduces the same codes.
    - Sequential numbers ignore malformed existing values.

Failure modes:
    - ValueError for a non-positive invite code length.

Usage:
    gen = CodeGenerator(seed=42)
    gen.next_consignor_number(["PRV-00001", "PRV-00007"])  # "PRV-00008"
"""

from __future__ import annotations

import random
import re
import string
from collections.abc import Callable, Iterable
from datetime import date

from consignment_kernel.logging_config import get_logger

logger = get_logger("engines.codes")

INVITE_ALPHABET = string.ascii_uppercase + string.digits

STORE_CODE_MAX_ATTEMPTS = 100


class CodeGenerator:
    """
    Identifier generator with an injected random source.

    Contract:
        Pass either ``rng`` or ``seed``.  With neither, a fresh
        ``random.Random()`` seeded from the OS is used.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        seed: int | None = None,
        consignor_prefix: str = "PRV",
    ):
        if rng is None:
            rng = random.Random(seed)
        self._rng = rng
        self.consignor_prefix = consignor_prefix

    def next_consignor_number(self, existing: Iterable[str]) -> str:
        """Next sequential consignor number after the highest existing one."""
        pattern = re.compile(rf"^{re.escape(self.consignor_prefix)}-(\d+)$")
        highest = 0
        for number in existing:
            match = pattern.match(number or "")
            if match:
                highest = max(highest, int(match.group(1)))
        return f"{self.consignor_prefix}-{highest + 1:05d}"

    def next_payout_number(self, existing: Iterable[str], today: date) -> str:
        """
        Next payout number for ``today``: PO{yyyymmdd}{nnn}.

        Only numbers sharing today's prefix are considered, and sequences
        compare as integers so 1000 follows 999.  Malformed sequence parts
        are ignored.
        """
        prefix = f"PO{today:%Y%m%d}"
        sequences = [
            int(n[len(prefix):])
            for n in existing
            if n.startswith(prefix) and n[len(prefix):].isdigit()
        ]
        return f"{prefix}{max(sequences, default=0) + 1:03d}"

    def invite_code(self, length: int = 8) -> str:
        """Random code over A-Z0-9 for portal invitations."""
        if length < 1:
            raise ValueError(f"length must be positive, got {length}")
        return "".join(self._rng.choice(INVITE_ALPHABET) for _ in range(length))

    def store_code(self, is_taken: Callable[[str], bool]) -> str:
        """
        Random 4-digit store code not reported taken by ``is_taken``.

        After STORE_CODE_MAX_ATTEMPTS collisions, returns a 5-digit code
        without checking it.
        """
        for _ in range(STORE_CODE_MAX_ATTEMPTS):
            code = str(self._rng.randrange(1000, 9999))
            if not is_taken(code):
                return code

        code = str(self._rng.randrange(10000, 99999))
        logger.warning("store_code_fallback", extra={
            "attempts": STORE_CODE_MAX_ATTEMPTS,
            "code_length": len(code),
        })
        return code
