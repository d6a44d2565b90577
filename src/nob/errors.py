"""Fatal contract violations.

Recoverable failures are reported as ``bool``/``RebuildStatus`` results after a
log line. The exceptions here are for broken invariants only and are not meant
to be caught by library code.
"""

from __future__ import annotations


class ContractViolation(AssertionError):
    """A caller broke an invariant; continuing would act on undefined state."""


class ArenaOverflowError(ContractViolation, MemoryError):
    """The temporary arena ran out of capacity."""


__all__ = ["ArenaOverflowError", "ContractViolation"]
