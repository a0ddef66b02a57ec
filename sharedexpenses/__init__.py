"""Mini README: Core package initializer for the shared expense tracker.

Participants from a fixed roster log shared expenses; the ledger derives who
owes whom and reduces it to a short list of settle-up transfers. The
``ledger`` package holds that core, ``storage`` the persistence backends,
``reports`` the exporter aggregates and ``interface`` the JSON API.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
