#!/usr/bin/env python3
"""run_league.py — Create and run a fair round-robin league from the shell.

Usage:
    python scripts/run_league.py create --name "Friday Pool" --players Ana Ben Cy Dee
    python scripts/run_league.py create --name "Office" --roster-csv roster.csv --no-home-away
    python scripts/run_league.py schedule --tournament <id> [--page 2] [--all]
    python scripts/run_league.py record --tournament <id> --match 3 --winner <player id>
    python scripts/run_league.py edit --tournament <id> --match 3 --winner <player id>
    python scripts/run_league.py standings --tournament <id> [--csv out.csv]
    python scripts/run_league.py list
    python scripts/run_league.py complete --tournament <id>
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fairleague.utils.runtime import validate_runtime

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger("league")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="FairLeague — round-robin tournaments")
    parser.add_argument("--db-path", default="data/tournaments.db", help="SQLite database path")
    parser.add_argument("--rules", default="config/rules.json", help="Path to rules.json")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Register players and generate fixtures")
    create.add_argument("--name", required=True, help="Tournament name")
    create.add_argument("--players", nargs="*", default=[], help="Player names in order")
    create.add_argument("--roster-csv", help="CSV file with a 'name' column")
    create.add_argument("--type", choices=["league", "cup"], default="league")
    home_away = create.add_mutually_exclusive_group()
    home_away.add_argument("--home-away", dest="home_away", action="store_true", default=None)
    home_away.add_argument("--no-home-away", dest="home_away", action="store_false")

    schedule = sub.add_parser("schedule", help="Show upcoming fixtures")
    schedule.add_argument("--tournament", required=True)
    schedule.add_argument("--page", type=int, default=1)
    schedule.add_argument("--all", action="store_true", help="Show every fixture")

    for name, help_text in (("record", "Record a result"), ("edit", "Correct a result")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--tournament", required=True)
        cmd.add_argument("--match", type=int, required=True, help="Match number")
        cmd.add_argument("--winner", required=True, help="Winning player id")

    standings = sub.add_parser("standings", help="Show the league table")
    standings.add_argument("--tournament", required=True)
    standings.add_argument("--csv", help="Also write the table to this CSV file")

    sub.add_parser("list", help="List tournaments")

    complete = sub.add_parser("complete", help="Mark a tournament complete")
    complete.add_argument("--tournament", required=True)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        validate_runtime()
    except RuntimeError as exc:
        logger.error(str(exc))
        return 1

    from fairleague.config import load_rules
    from fairleague.db.repository import TournamentRepository, open_session

    rules = load_rules(args.rules)
    session = open_session(args.db_path)
    repo = TournamentRepository(session)

    try:
        return _dispatch(args, repo, rules)
    except (ValueError, KeyError, OSError) as exc:
        logger.error(str(exc))
        return 1
    finally:
        session.close()


def _dispatch(args, repo, rules) -> int:
    from fairleague.engine.tournament_runner import TournamentRunner
    from fairleague.models.tournament import TournamentType

    if args.command == "create":
        names = list(args.players)
        if args.roster_csv:
            from fairleague.importers.roster_csv import load_roster_csv
            names.extend(load_roster_csv(args.roster_csv))

        runner = TournamentRunner.create(
            args.name,
            names,
            tournament_type=TournamentType(args.type),
            home_away_enabled=args.home_away,
            rules=rules,
        )
        runner.start()
        repo.save(runner)
        print(f"Created {runner.tournament.id}  {runner.tournament.name}")
        for player in runner.players:
            print(f"  {player.id}  {player.name}")
        _print_fixtures(runner, runner.upcoming_page(1))
        return 0

    if args.command == "list":
        for tournament in repo.list_all():
            print(
                f"{tournament.id}  {tournament.name:<30} {tournament.type.value:<6} "
                f"{tournament.status.value}"
            )
        return 0

    runner = repo.load(args.tournament, rules=rules)
    if runner is None:
        logger.error(f"Tournament not found: {args.tournament}")
        return 1

    if args.command == "schedule":
        fixtures = runner.fixtures if args.all else runner.upcoming_page(args.page)
        _print_fixtures(runner, fixtures)
        if not args.all:
            print(f"Page {args.page}/{max(1, runner.total_pages())}")
        return 0

    if args.command in ("record", "edit"):
        if args.command == "record":
            update = runner.record_result(args.match, args.winner)
        else:
            update = runner.edit_result(args.match, args.winner)
        if update.changed:
            repo.save_result(runner, update)
        print(f"{update.fixture}  ({update.winner.name} beat {update.loser.name})")
        return 0

    if args.command == "standings":
        rows = runner.standings_rows()
        print(f"{'#':>3}  {'Player':<20} {'Pts':>4} {'P':>3} {'W':>3} {'L':>3} {'Win%':>6}")
        for row in rows:
            print(
                f"{row['position']:>3}  {row['name']:<20} {row['points']:>4} "
                f"{row['played']:>3} {row['won']:>3} {row['lost']:>3} {row['win_rate']:>5.1f}%"
            )
        if args.csv:
            import pandas as pd
            pd.DataFrame(rows).to_csv(args.csv, index=False)
            logger.info(f"Standings written to {args.csv}")
        return 0

    if args.command == "complete":
        runner.mark_complete()
        repo.save(runner)
        print(f"{runner.tournament.name}: {runner.tournament.status.value}")
        return 0

    return 1


def _print_fixtures(runner, fixtures) -> None:
    names = {p.id: p.name for p in runner.players}
    for fixture in fixtures:
        line = f"  #{fixture.match_number:<4} {names[fixture.home_id]:>20}  vs  {names[fixture.away_id]:<20}"
        if fixture.completed:
            line += f"  winner: {names[fixture.winner_id]}"
        print(line)


if __name__ == "__main__":
    sys.exit(main())
