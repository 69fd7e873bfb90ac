"""Fixture model — one scheduled match between two players."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class Fixture(BaseModel):
    """A single league match.

    ``home_id``/``away_id`` are symmetric for scoring; the roles only matter
    for display and for telling the two legs of a home/away pair apart.
    """
    match_number: int = Field(ge=1, description="1-based play order")
    home_id: str
    away_id: str
    round: int = Field(default=1, ge=1)
    completed: bool = False
    winner_id: str | None = None

    model_config = {"validate_assignment": True}

    @model_validator(mode="after")
    def check_participants(self) -> "Fixture":
        if self.home_id == self.away_id:
            raise ValueError(f"Fixture {self.match_number}: home and away are both {self.home_id!r}")
        if self.completed and self.winner_id is None:
            raise ValueError(f"Fixture {self.match_number}: completed without a winner")
        if self.winner_id is not None and self.winner_id not in (self.home_id, self.away_id):
            raise ValueError(
                f"Fixture {self.match_number}: winner {self.winner_id!r} is not a participant"
            )
        return self

    @property
    def participants(self) -> tuple[str, str]:
        return (self.home_id, self.away_id)

    @property
    def pair_key(self) -> frozenset[str]:
        """Unordered pair identity, shared by both legs of a home/away pair."""
        return frozenset(self.participants)

    @property
    def loser_id(self) -> str | None:
        if self.winner_id is None:
            return None
        return self.opponent_of(self.winner_id)

    def involves(self, player_id: str) -> bool:
        return player_id in self.participants

    def opponent_of(self, player_id: str) -> str:
        """Return the other participant. Raises KeyError for outsiders."""
        if player_id == self.home_id:
            return self.away_id
        if player_id == self.away_id:
            return self.home_id
        raise KeyError(f"Player {player_id!r} is not in fixture {self.match_number}")

    def __str__(self) -> str:
        status = f"winner={self.winner_id}" if self.completed else "scheduled"
        return f"#{self.match_number} {self.home_id} vs {self.away_id} ({status})"
