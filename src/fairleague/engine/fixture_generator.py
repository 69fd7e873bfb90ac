"""Fixture generator — fair round-robin ordering for league tournaments.

Every pairing is enumerated up front, then fixtures are picked one at a
time using a greedy longest-wait-first score, so rest time is spread evenly
instead of letting a few players go back-to-back while others sit idle.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence

from fairleague.exceptions import InvalidRosterError
from fairleague.models.fixture import Fixture
from fairleague.models.player import Player

logger = logging.getLogger(__name__)

# Weight on the shorter of the two waits. Waits stay far below this for any
# realistic roster, so min-wait always dominates the sum-of-waits tie-break.
MIN_WAIT_WEIGHT = 1000
NEVER_PLAYED = -999


def _player_id(player: Player | str) -> str:
    return player.id if isinstance(player, Player) else str(player)


def _candidate_pairings(ids: list[str], home_away_enabled: bool) -> list[tuple[str, str]]:
    """All (home, away) pairings in enumeration order."""
    pairings: list[tuple[str, str]] = []
    n = len(ids)
    for i in range(n):
        for j in range(i + 1, n):
            pairings.append((ids[i], ids[j]))
            if home_away_enabled:
                pairings.append((ids[j], ids[i]))
    return pairings


def generate_schedule(
    players: Sequence[Player | str],
    home_away_enabled: bool = True,
) -> list[Fixture]:
    """Generate the full ordered fixture list for a league.

    Args:
        players: Roster in registration order (Player models or plain ids).
        home_away_enabled: Schedule each pair twice with swapped roles.

    Returns:
        Fixtures in play order; ``match_number`` is the 1-based position.
        Output depends only on input order (no randomness).

    Raises:
        InvalidRosterError: Fewer than 2 players or duplicate ids.
    """
    ids = [_player_id(p) for p in players]
    if len(ids) < 2:
        raise InvalidRosterError(f"Need at least 2 players, got {len(ids)}")

    seen: set[str] = set()
    duplicates: list[str] = []
    for pid in ids:
        if pid in seen and pid not in duplicates:
            duplicates.append(pid)
        seen.add(pid)
    if duplicates:
        raise InvalidRosterError(f"Duplicate player ids in roster: {', '.join(duplicates)}")

    remaining = _candidate_pairings(ids, home_away_enabled)
    expected = len(remaining)
    last_played = {pid: NEVER_PLAYED for pid in ids}
    schedule: list[Fixture] = []
    step = 1

    while remaining:
        best_index = -1
        best_score = None

        for index, (home, away) in enumerate(remaining):
            wait_home = step - last_played[home]
            wait_away = step - last_played[away]
            score = MIN_WAIT_WEIGHT * min(wait_home, wait_away) + (wait_home + wait_away)
            # Strict comparison keeps the earliest candidate on ties
            if best_score is None or score > best_score:
                best_score = score
                best_index = index

        # Unreachable while candidates remain; kept as a guard against an empty pick
        if best_index < 0:
            logger.warning(
                f"Scheduler stopped early: {len(schedule)}/{expected} fixtures placed"
            )
            break

        home, away = remaining.pop(best_index)
        schedule.append(Fixture(match_number=step, home_id=home, away_id=away, round=1))
        last_played[home] = step
        last_played[away] = step
        step += 1

    logger.info(
        f"Generated {len(schedule)} fixtures for {len(ids)} players "
        f"(home/away {'on' if home_away_enabled else 'off'})"
    )
    return schedule


def total_fixtures(num_players: int, home_away_enabled: bool = True) -> int:
    """Number of fixtures a full league produces for ``num_players``."""
    base_pairs = num_players * (num_players - 1) // 2
    return base_pairs * 2 if home_away_enabled else base_pairs


def fixtures_per_player(num_players: int, home_away_enabled: bool = True) -> int:
    """Matches each individual player will play."""
    per_player = num_players - 1
    return per_player * 2 if home_away_enabled else per_player


def rest_gaps(schedule: Sequence[Fixture]) -> dict[str, list[int]]:
    """Gaps between each player's consecutive appearances.

    A gap of 1 means back-to-back fixtures. Players with a single
    appearance map to an empty list.
    """
    appearances: dict[str, list[int]] = defaultdict(list)
    for fixture in sorted(schedule, key=lambda f: f.match_number):
        appearances[fixture.home_id].append(fixture.match_number)
        appearances[fixture.away_id].append(fixture.match_number)

    return {
        pid: [b - a for a, b in zip(numbers, numbers[1:])]
        for pid, numbers in appearances.items()
    }
