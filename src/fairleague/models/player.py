"""Player model for FairLeague.

A player is one roster entry in a single tournament. Counters start at zero
and are only moved by the ResultLedger; everything else about standings
(win rate, ranking) is derived.
"""

from __future__ import annotations

import hashlib

from pydantic import BaseModel, Field, field_validator


POINTS_PER_WIN = 3


def generate_player_id(name: str, tournament_name: str, index: int = 0) -> str:
    """Deterministic 12-char id from roster position and names.

    Stable across runs: re-creating a tournament under the same name from
    the same roster reproduces the same ids (and the same schedule).
    """
    raw = f"{tournament_name}:{index}:{name}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:12]


class Player(BaseModel):
    """A tournament participant and their cumulative counters."""
    id: str = Field(min_length=1, description="Opaque id, unique within a tournament")
    name: str = Field(min_length=1)
    profile_id: str | None = Field(default=None, description="Link to a cross-tournament profile")

    # Season tracking
    points: int = Field(default=0, ge=0)
    played: int = Field(default=0, ge=0)
    won: int = Field(default=0, ge=0)
    lost: int = Field(default=0, ge=0)

    model_config = {"validate_assignment": True}

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Player name cannot be empty")
        return v

    @property
    def win_rate(self) -> float:
        """Fraction of played matches won; 0.0 before the first match."""
        if self.played == 0:
            return 0.0
        return self.won / self.played

    @property
    def win_rate_percent(self) -> float:
        return round(self.win_rate * 100, 1)

    def reset_counters(self) -> None:
        """Zero all standings counters while keeping identity."""
        self.points = 0
        self.played = 0
        self.won = 0
        self.lost = 0
