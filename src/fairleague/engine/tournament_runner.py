"""Tournament Runner — orchestrates one league from registration to finish.

Handles roster registration, the one-off fixture generation, result
recording/correction through the ledger, progress views, and the automatic
switch to ``completed`` once every fixture has a result.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from fairleague.config import TournamentRules
from fairleague.engine.fixture_generator import generate_schedule, total_fixtures
from fairleague.engine.ledger import LedgerUpdate, ResultLedger, standings_rows
from fairleague.exceptions import (
    DuplicatePlayerError,
    EntryPolicyError,
    ScheduleLockedError,
    UnknownPlayerError,
    UnsupportedFormatError,
)
from fairleague.models.fixture import Fixture
from fairleague.models.player import Player, generate_player_id
from fairleague.models.tournament import (
    Tournament,
    TournamentStatus,
    TournamentType,
    check_entry_policy,
)
from fairleague.normalization.names import name_key, normalize_player_name

logger = logging.getLogger(__name__)


class TournamentRunner:
    """Own one tournament's roster, fixtures and ledger."""

    def __init__(
        self,
        tournament: Tournament,
        players: Iterable[Player] | None = None,
        fixtures: Iterable[Fixture] | None = None,
        rules: TournamentRules | None = None,
    ):
        """Wrap a tournament, either fresh or reloaded from storage.

        Args:
            tournament: Tournament header.
            players: Registered roster in registration order.
            fixtures: Previously generated fixtures. When given, the roster
                is locked and results can be recorded straight away.
            rules: Tournament policy. Defaults to built-in rules.
        """
        self.tournament = tournament
        self.rules = rules or TournamentRules()
        self.players: list[Player] = list(players or [])
        self.fixtures: list[Fixture] = sorted(fixtures or [], key=lambda f: f.match_number)
        self._ledger: ResultLedger | None = None
        if self.fixtures:
            self._ledger = ResultLedger(self.players)

    @classmethod
    def create(
        cls,
        name: str,
        player_names: Iterable[str] = (),
        tournament_type: TournamentType = TournamentType.LEAGUE,
        home_away_enabled: bool | None = None,
        rules: TournamentRules | None = None,
    ) -> "TournamentRunner":
        """Build a runner and register ``player_names`` in order."""
        rules = rules or TournamentRules()
        if home_away_enabled is None:
            home_away_enabled = rules.default_home_away

        tournament = Tournament(
            name=name.strip(),
            type=tournament_type,
            home_away_enabled=home_away_enabled,
        )
        runner = cls(tournament, rules=rules)
        for player_name in player_names:
            runner.add_player(player_name)
        return runner

    # ── Registration ─────────────────────────────────────────────────────

    @property
    def is_scheduled(self) -> bool:
        return bool(self.fixtures)

    def add_player(self, name: str, player_id: str | None = None) -> Player:
        """Register a player before scheduling.

        Names are compared case- and accent-insensitively.

        Raises:
            ScheduleLockedError: Fixtures were already generated.
            DuplicatePlayerError: Name or id already on the roster.
        """
        self._require_unscheduled("add players")
        clean_name = normalize_player_name(name)
        key = name_key(clean_name)
        if any(name_key(p.name) == key for p in self.players):
            raise DuplicatePlayerError(f"Player {clean_name!r} is already registered")

        if player_id is None:
            player_id = generate_player_id(clean_name, self.tournament.name, len(self.players))
        if any(p.id == player_id for p in self.players):
            raise DuplicatePlayerError(f"Player id {player_id!r} is already registered")

        player = Player(id=player_id, name=clean_name)
        self.players.append(player)
        return player

    def remove_player(self, player_id: str) -> Player:
        """Remove a player before scheduling."""
        self._require_unscheduled("remove players")
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return self.players.pop(index)
        raise UnknownPlayerError(f"Unknown player id: {player_id}")

    def can_start(self) -> bool:
        """True when the roster satisfies the entry policy for this format."""
        try:
            check_entry_policy(
                self.tournament.type, len(self.players), self.rules.min_league_players,
            )
        except EntryPolicyError:
            return False
        return True

    def start(self) -> list[Fixture]:
        """Generate the fixture list once and lock the roster.

        Raises:
            ScheduleLockedError: Already started.
            EntryPolicyError: Roster size does not fit the format.
            UnsupportedFormatError: Cup brackets are not scheduled here.
        """
        self._require_unscheduled("start again")
        check_entry_policy(
            self.tournament.type, len(self.players), self.rules.min_league_players,
        )
        if self.tournament.type != TournamentType.LEAGUE:
            raise UnsupportedFormatError(
                f"{self.tournament.type.value} scheduling is not supported"
            )

        self.fixtures = generate_schedule(self.players, self.tournament.home_away_enabled)
        self._ledger = ResultLedger(self.players)
        self.tournament.touch()

        logger.info(
            f"Tournament {self.tournament.name!r}: {len(self.players)} players, "
            f"{len(self.fixtures)} fixtures scheduled"
        )
        return self.fixtures

    # ── Results ──────────────────────────────────────────────────────────

    @property
    def ledger(self) -> ResultLedger:
        if self._ledger is None:
            raise ScheduleLockedError("Tournament has not been started yet")
        return self._ledger

    def record_result(self, match_number: int, winner_id: str) -> LedgerUpdate:
        update = self.ledger.record_result(self.get_fixture(match_number), winner_id)
        self._after_result()
        return update

    def edit_result(self, match_number: int, new_winner_id: str) -> LedgerUpdate:
        update = self.ledger.edit_result(self.get_fixture(match_number), new_winner_id)
        if update.changed:
            self._after_result()
        return update

    def mark_complete(self) -> None:
        """Close the tournament by hand, even with fixtures outstanding."""
        if self.tournament.status == TournamentStatus.COMPLETED:
            return
        self.tournament.set_status(TournamentStatus.COMPLETED)
        logger.info(
            f"Tournament {self.tournament.name!r} marked complete "
            f"({len(self.completed_fixtures())}/{len(self.fixtures)} fixtures played)"
        )

    # ── Views ────────────────────────────────────────────────────────────

    @property
    def is_complete(self) -> bool:
        """All fixtures have a result."""
        return bool(self.fixtures) and all(f.completed for f in self.fixtures)

    @property
    def expected_fixtures(self) -> int:
        return total_fixtures(len(self.players), self.tournament.home_away_enabled)

    def get_player(self, player_id: str) -> Player:
        for player in self.players:
            if player.id == player_id:
                return player
        raise UnknownPlayerError(f"Unknown player id: {player_id}")

    def get_fixture(self, match_number: int) -> Fixture:
        for fixture in self.fixtures:
            if fixture.match_number == match_number:
                return fixture
        raise KeyError(f"Unknown match number: {match_number}")

    def completed_fixtures(self) -> list[Fixture]:
        return [f for f in self.fixtures if f.completed]

    def upcoming_fixtures(self) -> list[Fixture]:
        return [f for f in self.fixtures if not f.completed]

    def total_pages(self) -> int:
        return math.ceil(len(self.upcoming_fixtures()) / self.rules.matches_per_page)

    def upcoming_page(self, page: int = 1) -> list[Fixture]:
        """One page (1-based) of upcoming fixtures; empty past the end."""
        if page < 1:
            raise ValueError(f"Page must be >= 1, got {page}")
        size = self.rules.matches_per_page
        start = (page - 1) * size
        return self.upcoming_fixtures()[start:start + size]

    def standings(self) -> list[Player]:
        if self._ledger is None:
            return list(self.players)
        return self._ledger.standings()

    def standings_rows(self) -> list[dict]:
        return standings_rows(self.players)

    # ── Internal Methods ─────────────────────────────────────────────────

    def _require_unscheduled(self, action: str) -> None:
        if self.is_scheduled:
            raise ScheduleLockedError(f"Cannot {action} once fixtures are generated")

    def _after_result(self) -> None:
        self.tournament.touch()
        if self.is_complete and self.tournament.is_active:
            self.tournament.set_status(TournamentStatus.COMPLETED)
            leader = self.standings()[0]
            logger.info(
                f"Tournament {self.tournament.name!r} complete, winner: {leader.name}"
            )
