"""Repository layer — save/load for FairLeague tournaments.

Handles conversion between Pydantic models and SQLAlchemy ORM objects.
A tournament is saved whole (header, roster, fixtures); individual results
are written back with ``save_result`` after each ledger call.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from fairleague.config import TournamentRules
from fairleague.db.models import Base, FixtureDB, PlayerDB, TournamentDB
from fairleague.engine.ledger import LedgerUpdate
from fairleague.engine.tournament_runner import TournamentRunner
from fairleague.models.fixture import Fixture
from fairleague.models.player import Player
from fairleague.models.tournament import Tournament, TournamentStatus, TournamentType

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).resolve().parents[3] / "data" / "tournaments.db"


def database_url(db_path: str | Path | None = None) -> str:
    """SQLite URL for a tournament database file.

    ``":memory:"`` maps to a private in-memory database; ``None`` to
    data/tournaments.db, whose directory is created on demand.
    """
    if db_path == ":memory:":
        return "sqlite://"
    path = Path(db_path) if db_path else DEFAULT_DB_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path}"


def open_session(db_path: str | Path | None = None, echo: bool = False) -> Session:
    """Open a session on a tournament database, creating missing tables."""
    engine = create_engine(database_url(db_path), echo=echo)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)()


class TournamentRepository:
    """Save/load whole tournaments plus per-result write-back."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, tournament_id: str) -> Tournament | None:
        """Get a tournament header by id."""
        db_obj = self.session.get(TournamentDB, tournament_id)
        if db_obj is None:
            return None
        return _db_to_tournament(db_obj)

    def list_all(self) -> list[Tournament]:
        """All tournaments, newest first."""
        db_objs = self.session.query(TournamentDB).order_by(TournamentDB.created_at.desc()).all()
        return [_db_to_tournament(obj) for obj in db_objs]

    def save(self, runner: TournamentRunner) -> None:
        """Insert or update a tournament with its roster and fixtures."""
        tournament_id = runner.tournament.id
        self.session.merge(_tournament_to_db(runner.tournament))
        # Drop players removed from the roster since the last save
        roster_ids = [p.id for p in runner.players]
        self.session.query(PlayerDB).filter(
            PlayerDB.tournament_id == tournament_id,
            PlayerDB.id.not_in(roster_ids),
        ).delete(synchronize_session=False)
        for seq, player in enumerate(runner.players):
            self.session.merge(_player_to_db(player, tournament_id, seq))
        for fixture in runner.fixtures:
            self.session.merge(_fixture_to_db(fixture, tournament_id))
        self.session.commit()
        logger.info(
            f"Saved tournament {runner.tournament.name!r}: "
            f"{len(runner.players)} players, {len(runner.fixtures)} fixtures"
        )

    def save_result(self, runner: TournamentRunner, update: LedgerUpdate) -> None:
        """Write back the fixture and both players touched by a ledger call."""
        tournament_id = runner.tournament.id
        self.session.merge(_tournament_to_db(runner.tournament))
        self.session.merge(_fixture_to_db(update.fixture, tournament_id))
        for player in (update.winner, update.loser):
            seq = runner.players.index(player)
            self.session.merge(_player_to_db(player, tournament_id, seq))
        self.session.commit()

    def load(self, tournament_id: str, rules: TournamentRules | None = None) -> TournamentRunner | None:
        """Rebuild a runner from storage, or None if the id is unknown."""
        tournament = self.get(tournament_id)
        if tournament is None:
            return None

        player_objs = (
            self.session.query(PlayerDB)
            .filter(PlayerDB.tournament_id == tournament_id)
            .order_by(PlayerDB.seq)
            .all()
        )
        fixture_objs = (
            self.session.query(FixtureDB)
            .filter(FixtureDB.tournament_id == tournament_id)
            .order_by(FixtureDB.match_number)
            .all()
        )
        return TournamentRunner(
            tournament,
            players=[_db_to_player(obj) for obj in player_objs],
            fixtures=[_db_to_fixture(obj) for obj in fixture_objs],
            rules=rules,
        )

    def delete(self, tournament_id: str) -> bool:
        """Delete a tournament together with its players and fixtures."""
        db_obj = self.session.get(TournamentDB, tournament_id)
        if db_obj is None:
            return False
        self.session.query(FixtureDB).filter(FixtureDB.tournament_id == tournament_id).delete()
        self.session.query(PlayerDB).filter(PlayerDB.tournament_id == tournament_id).delete()
        self.session.delete(db_obj)
        self.session.commit()
        return True

    def count(self) -> int:
        return self.session.query(TournamentDB).count()


def export_snapshot(session: Session, output_path: str | Path) -> dict:
    """Export every tournament with roster and fixtures as a JSON snapshot."""
    repo = TournamentRepository(session)

    tournaments = []
    for header in repo.list_all():
        runner = repo.load(header.id)
        tournaments.append({
            "tournament": header.model_dump(mode="json"),
            "players": [p.model_dump(mode="json") for p in runner.players],
            "fixtures": [f.model_dump(mode="json") for f in runner.fixtures],
        })

    snapshot = {
        "tournaments": tournaments,
        "meta": {
            "tournament_count": len(tournaments),
            "player_count": sum(len(t["players"]) for t in tournaments),
            "fixture_count": sum(len(t["fixtures"]) for t in tournaments),
        },
    }

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w") as f:
        json.dump(snapshot, f, indent=2, ensure_ascii=False)

    logger.info(f"Exported snapshot to {output}: {snapshot['meta']}")
    return snapshot


# ── Conversion Helpers ──────────────────────────────────────────────────


def _tournament_to_db(tournament: Tournament) -> TournamentDB:
    return TournamentDB(
        id=tournament.id,
        name=tournament.name,
        type=tournament.type.value,
        status=tournament.status.value,
        home_away_enabled=tournament.home_away_enabled,
        created_at=tournament.created_at,
        updated_at=tournament.updated_at,
    )


def _db_to_tournament(db: TournamentDB) -> Tournament:
    try:
        status = TournamentStatus(db.status)
    except ValueError:
        status = TournamentStatus.ACTIVE

    fields = {}
    if db.created_at is not None:
        fields["created_at"] = db.created_at
    if db.updated_at is not None:
        fields["updated_at"] = db.updated_at

    return Tournament(
        id=db.id,
        name=db.name,
        type=TournamentType(db.type or "league"),
        status=status,
        home_away_enabled=True if db.home_away_enabled is None else db.home_away_enabled,
        **fields,
    )


def _player_to_db(player: Player, tournament_id: str, seq: int) -> PlayerDB:
    return PlayerDB(
        tournament_id=tournament_id,
        id=player.id,
        name=player.name,
        profile_id=player.profile_id,
        seq=seq,
        points=player.points,
        played=player.played,
        won=player.won,
        lost=player.lost,
    )


def _db_to_player(db: PlayerDB) -> Player:
    return Player(
        id=db.id,
        name=db.name,
        profile_id=db.profile_id,
        points=db.points or 0,
        played=db.played or 0,
        won=db.won or 0,
        lost=db.lost or 0,
    )


def _fixture_to_db(fixture: Fixture, tournament_id: str) -> FixtureDB:
    return FixtureDB(
        tournament_id=tournament_id,
        match_number=fixture.match_number,
        round=fixture.round,
        home_player_id=fixture.home_id,
        away_player_id=fixture.away_id,
        completed=fixture.completed,
        winner_id=fixture.winner_id,
    )


def _db_to_fixture(db: FixtureDB) -> Fixture:
    return Fixture(
        match_number=db.match_number,
        round=db.round or 1,
        home_id=db.home_player_id,
        away_id=db.away_player_id,
        completed=bool(db.completed),
        winner_id=db.winner_id,
    )
