"""Tests for TournamentRunner — registration, start, results, progress."""

from __future__ import annotations

import pytest

from fairleague.config import TournamentRules
from fairleague.engine.tournament_runner import TournamentRunner
from fairleague.exceptions import (
    AlreadyCompletedError,
    DuplicatePlayerError,
    EntryPolicyError,
    ScheduleLockedError,
    UnknownPlayerError,
    UnsupportedFormatError,
)
from fairleague.models.tournament import TournamentStatus, TournamentType


def _started(names=("Ana", "Ben", "Cy", "Dee"), home_away=False, rules=None) -> TournamentRunner:
    runner = TournamentRunner.create("Friday Pool", names, home_away_enabled=home_away, rules=rules)
    runner.start()
    return runner


def _play_all(runner: TournamentRunner) -> None:
    for fixture in list(runner.upcoming_fixtures()):
        runner.record_result(fixture.match_number, fixture.home_id)


class TestRegistration:
    def test_create_registers_in_order(self):
        runner = TournamentRunner.create("Friday Pool", ["Ana", "Ben", "Cy"])
        assert [p.name for p in runner.players] == ["Ana", "Ben", "Cy"]
        assert len({p.id for p in runner.players}) == 3
        assert not runner.is_scheduled

    def test_recreating_same_roster_reproduces_ids(self):
        first = TournamentRunner.create("Friday Pool", ["Ana", "Ben", "Cy"])
        second = TournamentRunner.create("Friday Pool", ["Ana", "Ben", "Cy"])
        assert first.tournament.id != second.tournament.id
        assert [p.id for p in first.players] == [p.id for p in second.players]
        assert TournamentRunner.create("Office", ["Ana"]).players[0].id != first.players[0].id

    def test_home_away_defaults_from_rules(self):
        runner = TournamentRunner.create("X", rules=TournamentRules(default_home_away=False))
        assert runner.tournament.home_away_enabled is False
        assert TournamentRunner.create("Y").tournament.home_away_enabled is True

    def test_duplicate_name_case_and_accent_insensitive(self):
        runner = TournamentRunner.create("X", ["José"])
        with pytest.raises(DuplicatePlayerError):
            runner.add_player("jose")
        with pytest.raises(DuplicatePlayerError):
            runner.add_player("  JOSÉ ")

    def test_duplicate_explicit_id(self):
        runner = TournamentRunner.create("X")
        runner.add_player("Ana", player_id="p1")
        with pytest.raises(DuplicatePlayerError):
            runner.add_player("Ben", player_id="p1")

    def test_blank_name(self):
        runner = TournamentRunner.create("X")
        with pytest.raises(ValueError):
            runner.add_player("   ")

    def test_remove_player(self):
        runner = TournamentRunner.create("X", ["Ana", "Ben", "Cy"])
        ben = runner.players[1]
        removed = runner.remove_player(ben.id)
        assert removed.name == "Ben"
        assert [p.name for p in runner.players] == ["Ana", "Cy"]

    def test_remove_unknown(self):
        runner = TournamentRunner.create("X", ["Ana"])
        with pytest.raises(UnknownPlayerError):
            runner.remove_player("nope")

    def test_roster_locked_after_start(self):
        runner = _started()
        with pytest.raises(ScheduleLockedError):
            runner.add_player("Eve")
        with pytest.raises(ScheduleLockedError):
            runner.remove_player(runner.players[0].id)


class TestStart:
    def test_league_start_generates_fixtures(self):
        runner = _started(home_away=True)
        assert len(runner.fixtures) == 12 == runner.expected_fixtures
        assert runner.fixtures[0].home_id == runner.players[0].id
        assert runner.fixtures[0].away_id == runner.players[1].id

    def test_start_twice(self):
        runner = _started()
        with pytest.raises(ScheduleLockedError):
            runner.start()

    def test_league_needs_three_players(self):
        runner = TournamentRunner.create("X", ["Ana", "Ben"])
        assert not runner.can_start()
        with pytest.raises(EntryPolicyError):
            runner.start()
        assert runner.fixtures == []

    def test_custom_minimum_from_rules(self):
        runner = TournamentRunner.create("X", ["Ana", "Ben"], rules=TournamentRules(min_league_players=2))
        assert runner.can_start()
        assert len(runner.start()) == 2

    def test_cup_policy_then_unsupported(self):
        runner = TournamentRunner.create("X", ["Ana", "Ben", "Cy"], tournament_type=TournamentType.CUP)
        assert not runner.can_start()
        runner.add_player("Dee")
        assert runner.can_start()
        with pytest.raises(UnsupportedFormatError):
            runner.start()

    def test_ledger_requires_start(self):
        runner = TournamentRunner.create("X", ["Ana", "Ben", "Cy"])
        with pytest.raises(ScheduleLockedError):
            runner.ledger  # noqa: B018


class TestResults:
    def test_record_updates_standings(self):
        runner = _started()
        first = runner.fixtures[0]
        runner.record_result(1, first.away_id)
        leader = runner.standings()[0]
        assert leader.id == first.away_id
        assert leader.points == 3
        assert runner.get_fixture(1).completed

    def test_record_twice(self):
        runner = _started()
        runner.record_result(1, runner.fixtures[0].home_id)
        with pytest.raises(AlreadyCompletedError):
            runner.record_result(1, runner.fixtures[0].away_id)

    def test_unknown_match_number(self):
        runner = _started()
        with pytest.raises(KeyError):
            runner.record_result(99, runner.players[0].id)

    def test_auto_complete_after_last_result(self):
        runner = _started()
        _play_all(runner)
        assert runner.is_complete
        assert runner.tournament.status == TournamentStatus.COMPLETED
        runner.ledger.check_conservation(runner.fixtures)

    def test_not_complete_until_last_result(self):
        runner = _started()
        for fixture in runner.fixtures[:-1]:
            runner.record_result(fixture.match_number, fixture.home_id)
        assert not runner.is_complete
        assert runner.tournament.status == TournamentStatus.ACTIVE

    def test_edit_after_completion_allowed(self):
        runner = _started()
        _play_all(runner)
        fixture = runner.fixtures[0]
        update = runner.edit_result(fixture.match_number, fixture.away_id)
        assert update.changed
        assert runner.tournament.status == TournamentStatus.COMPLETED
        runner.ledger.check_conservation(runner.fixtures)

    def test_mark_complete_manually(self):
        runner = _started()
        runner.mark_complete()
        assert runner.tournament.status == TournamentStatus.COMPLETED
        assert not runner.is_complete
        runner.mark_complete()
        assert runner.tournament.status == TournamentStatus.COMPLETED


class TestViews:
    def test_pagination(self):
        names = ["Ana", "Ben", "Cy", "Dee", "Eve", "Fay"]
        runner = _started(names, home_away=True)
        assert len(runner.upcoming_fixtures()) == 30
        assert runner.total_pages() == 3
        assert [f.match_number for f in runner.upcoming_page(1)] == list(range(1, 11))
        assert [f.match_number for f in runner.upcoming_page(3)] == list(range(21, 31))
        assert runner.upcoming_page(4) == []
        with pytest.raises(ValueError):
            runner.upcoming_page(0)

    def test_completed_fixtures_leave_upcoming(self):
        runner = _started()
        runner.record_result(1, runner.fixtures[0].home_id)
        assert [f.match_number for f in runner.completed_fixtures()] == [1]
        assert runner.upcoming_fixtures()[0].match_number == 2

    def test_page_size_from_rules(self):
        runner = _started(rules=TournamentRules(matches_per_page=4))
        assert runner.total_pages() == 2
        assert len(runner.upcoming_page(2)) == 2

    def test_standings_before_start(self):
        runner = TournamentRunner.create("X", ["Ana", "Ben", "Cy"])
        assert [p.name for p in runner.standings()] == ["Ana", "Ben", "Cy"]

    def test_standings_rows(self):
        runner = _started()
        runner.record_result(1, runner.fixtures[0].home_id)
        rows = runner.standings_rows()
        assert rows[0]["position"] == 1
        assert rows[0]["points"] == 3
        assert [r["position"] for r in rows] == [1, 2, 3, 4]

    def test_get_player(self):
        runner = _started()
        ana = runner.players[0]
        assert runner.get_player(ana.id) is ana
        with pytest.raises(UnknownPlayerError):
            runner.get_player("nope")
