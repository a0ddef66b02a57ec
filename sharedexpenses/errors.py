"""Mini README: Exception taxonomy shared across the ledger packages.

Structure:
    * LedgerError - base class for every error raised by this package.
    * ValidationError - rejected expense or settlement input; nothing mutated.
    * PersistenceError - the ledger store could not read, write or decode data.

``ValidationError`` also derives from ``ValueError`` so callers that already
guard input parsing with ``except ValueError`` keep working.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for ledger failures."""


class ValidationError(LedgerError, ValueError):
    """User-supplied expense or settlement data violates an invariant."""


class PersistenceError(LedgerError):
    """The durable store failed to load or save ledger data."""
