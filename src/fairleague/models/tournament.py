"""Tournament model and entry policy for FairLeague."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from fairleague.exceptions import EntryPolicyError

DEFAULT_MIN_LEAGUE_PLAYERS = 3


class TournamentType(str, Enum):
    """Supported tournament formats."""
    LEAGUE = "league"
    CUP = "cup"


class TournamentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Tournament(BaseModel):
    """Tournament header record. The roster and fixtures live in the runner."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = Field(min_length=1)
    type: TournamentType = Field(default=TournamentType.LEAGUE)
    status: TournamentStatus = Field(default=TournamentStatus.ACTIVE)
    home_away_enabled: bool = Field(
        default=True, description="Double round-robin; fixed at creation",
    )
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == TournamentStatus.ACTIVE

    def set_status(self, status: TournamentStatus) -> None:
        self.status = status
        self.touch()

    def touch(self) -> None:
        self.updated_at = _utcnow()


def check_entry_policy(
    tournament_type: TournamentType,
    num_players: int,
    min_league_players: int = DEFAULT_MIN_LEAGUE_PLAYERS,
) -> None:
    """Caller-side roster size rules, applied before any scheduling.

    League needs at least ``min_league_players``; cup needs a power of two
    (2, 4, 8, ...).

    Raises:
        EntryPolicyError: If the roster size does not fit the format.
    """
    if tournament_type == TournamentType.LEAGUE:
        if num_players < min_league_players:
            raise EntryPolicyError(
                f"Minimum {min_league_players} players required for league tournament, "
                f"got {num_players}"
            )
        return

    if num_players < 2 or num_players & (num_players - 1) != 0:
        raise EntryPolicyError(
            f"Cup tournament requires 2, 4, 8, 16, etc. players, got {num_players}"
        )
