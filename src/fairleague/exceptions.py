"""Error types for FairLeague.

Every error is a local validation failure raised at the call that broke the
contract. Nothing here is retried internally; callers decide what to do.
"""

from __future__ import annotations


class FairLeagueError(ValueError):
    """Base class for all tournament rule violations."""


class InvalidRosterError(FairLeagueError):
    """Raised when a roster cannot be scheduled (too small or duplicate ids)."""


class AlreadyCompletedError(FairLeagueError):
    """Raised when recording a result on a fixture that already has one."""


class NotCompletedError(FairLeagueError):
    """Raised when editing a fixture that was never completed."""


class InvalidWinnerError(FairLeagueError):
    """Raised when the winner id is not one of the fixture's participants."""


class UnknownPlayerError(FairLeagueError):
    """Raised when a fixture references a player the ledger does not hold."""


class DuplicatePlayerError(FairLeagueError):
    """Raised when registering a player whose name is already on the roster."""


class ScheduleLockedError(FairLeagueError):
    """Raised when the roster is changed after fixtures were generated."""


class EntryPolicyError(FairLeagueError):
    """Raised when the roster size does not fit the tournament type."""


class UnsupportedFormatError(FairLeagueError):
    """Raised for tournament types the scheduler does not handle (cup brackets)."""


class LedgerIntegrityError(RuntimeError):
    """Raised when player counters no longer agree with completed fixtures."""
