"""Result ledger — applies fixture outcomes to player counters.

Handles first-time recording and later correction of a result, plus the
deterministic standings order used for display. Each record/edit is one
transaction: everything is validated before the first counter moves, and
the whole update runs under the ledger's lock.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from fairleague.exceptions import (
    AlreadyCompletedError,
    InvalidWinnerError,
    LedgerIntegrityError,
    NotCompletedError,
    UnknownPlayerError,
)
from fairleague.models.fixture import Fixture
from fairleague.models.player import POINTS_PER_WIN, Player

logger = logging.getLogger(__name__)


@dataclass
class LedgerUpdate:
    """What a record/edit call touched, handed back for persistence."""
    fixture: Fixture
    winner: Player
    loser: Player
    changed: bool = True


def rank_players(players: Iterable[Player]) -> list[Player]:
    """Sort by points desc, then wins desc, then fewer games played.

    The sort is stable, so players still level after all three keys keep
    their roster order.
    """
    return sorted(players, key=lambda p: (-p.points, -p.won, p.played))


def standings_rows(players: Iterable[Player]) -> list[dict]:
    """Position-numbered rows for display layers."""
    rows = []
    for position, player in enumerate(rank_players(players), start=1):
        rows.append({
            "position": position,
            "id": player.id,
            "name": player.name,
            "points": player.points,
            "played": player.played,
            "won": player.won,
            "lost": player.lost,
            "win_rate": player.win_rate_percent,
        })
    return rows


class ResultLedger:
    """Counter bookkeeping for one tournament's roster."""

    def __init__(self, players: Sequence[Player]):
        self._players: dict[str, Player] = {}
        for player in players:
            self._players[player.id] = player
        self._lock = threading.Lock()

    @property
    def players(self) -> list[Player]:
        """Roster in insertion order."""
        return list(self._players.values())

    def get_player(self, player_id: str) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise UnknownPlayerError(f"Unknown player id: {player_id}") from None

    def standings(self) -> list[Player]:
        return rank_players(self._players.values())

    # ── Result Recording ─────────────────────────────────────────────────

    def record_result(self, fixture: Fixture, winner_id: str) -> LedgerUpdate:
        """Complete a fixture and credit both participants.

        Raises:
            AlreadyCompletedError: Fixture already has a result (use edit_result).
            InvalidWinnerError: ``winner_id`` is not home or away.
            UnknownPlayerError: A participant is not on this ledger's roster.
        """
        with self._lock:
            if fixture.completed:
                raise AlreadyCompletedError(
                    f"Fixture {fixture.match_number} is already completed; edit it instead"
                )
            winner, loser = self._resolve(fixture, winner_id)

            # Winner first: a completed fixture must always carry one
            fixture.winner_id = winner.id
            fixture.completed = True

            winner.won += 1
            winner.points += POINTS_PER_WIN
            winner.played += 1
            loser.played += 1
            loser.lost += 1

        logger.info(f"Fixture {fixture.match_number}: {winner.name} beat {loser.name}")
        return LedgerUpdate(fixture=fixture, winner=winner, loser=loser)

    def edit_result(self, fixture: Fixture, new_winner_id: str) -> LedgerUpdate:
        """Correct the winner of an already completed fixture.

        The previous outcome is reverted (counters floored at 0) and the new
        one applied. ``played`` is left alone for both players. Re-submitting
        the current winner changes nothing.

        Raises:
            NotCompletedError: Fixture has no recorded result yet.
            InvalidWinnerError: ``new_winner_id`` is not home or away.
            UnknownPlayerError: A participant is not on this ledger's roster.
        """
        with self._lock:
            if not fixture.completed or fixture.winner_id is None:
                raise NotCompletedError(
                    f"Fixture {fixture.match_number} has no result to edit"
                )
            new_winner, new_loser = self._resolve(fixture, new_winner_id)

            if fixture.winner_id == new_winner.id:
                return LedgerUpdate(
                    fixture=fixture, winner=new_winner, loser=new_loser, changed=False,
                )

            # The two participants simply swap roles
            old_winner, old_loser = new_loser, new_winner
            old_winner.points = max(0, old_winner.points - POINTS_PER_WIN)
            old_winner.won = max(0, old_winner.won - 1)
            old_loser.lost = max(0, old_loser.lost - 1)

            new_winner.points += POINTS_PER_WIN
            new_winner.won += 1
            new_loser.lost += 1

            fixture.winner_id = new_winner.id

        logger.info(
            f"Fixture {fixture.match_number} corrected: {new_winner.name} now beats {new_loser.name}"
        )
        return LedgerUpdate(fixture=fixture, winner=new_winner, loser=new_loser)

    # ── Integrity ────────────────────────────────────────────────────────

    def check_conservation(self, fixtures: Iterable[Fixture]) -> None:
        """Verify counters agree with each other and with completed fixtures.

        Raises:
            LedgerIntegrityError: On the first inconsistency found.
        """
        completed = sum(1 for f in fixtures if f.completed)
        for player in self._players.values():
            if player.played != player.won + player.lost:
                raise LedgerIntegrityError(
                    f"{player.name}: played={player.played} but won+lost="
                    f"{player.won + player.lost}"
                )
            if player.points != POINTS_PER_WIN * player.won:
                raise LedgerIntegrityError(
                    f"{player.name}: points={player.points} but won={player.won}"
                )

        total_won = sum(p.won for p in self._players.values())
        if total_won != completed:
            raise LedgerIntegrityError(
                f"Total wins {total_won} != completed fixtures {completed}"
            )

    # ── Internal Methods ─────────────────────────────────────────────────

    def _resolve(self, fixture: Fixture, winner_id: str) -> tuple[Player, Player]:
        """Validate a winner id and return (winner, loser) players."""
        if not fixture.involves(winner_id):
            raise InvalidWinnerError(
                f"Player {winner_id!r} is not in fixture {fixture.match_number} "
                f"({fixture.home_id} vs {fixture.away_id})"
            )
        winner = self.get_player(winner_id)
        loser = self.get_player(fixture.opponent_of(winner_id))
        return winner, loser
