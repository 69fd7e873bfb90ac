"""Model exports for FairLeague."""

from fairleague.models.fixture import Fixture
from fairleague.models.player import POINTS_PER_WIN, Player, generate_player_id
from fairleague.models.tournament import (
    Tournament,
    TournamentStatus,
    TournamentType,
    check_entry_policy,
)

__all__ = [
    "Fixture",
    "POINTS_PER_WIN",
    "Player",
    "Tournament",
    "TournamentStatus",
    "TournamentType",
    "check_entry_policy",
    "generate_player_id",
]
