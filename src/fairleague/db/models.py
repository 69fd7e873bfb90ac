"""SQLAlchemy ORM models for the FairLeague database.

Maps the Tournament, Player and Fixture Pydantic models to SQLite tables.
Players and fixtures are keyed per tournament.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class TournamentDB(Base):
    """SQLite table for tournaments."""

    __tablename__ = "tournaments"

    id = Column(String(32), primary_key=True)
    name = Column(String(100), nullable=False, index=True)
    type = Column(String(10), nullable=False, default="league")
    status = Column(String(10), nullable=False, default="active")
    home_away_enabled = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<TournamentDB {self.name} ({self.type}, {self.status})>"


class PlayerDB(Base):
    """SQLite table for tournament players."""

    __tablename__ = "players"

    tournament_id = Column(String(32), ForeignKey("tournaments.id"), primary_key=True)
    id = Column(String(32), primary_key=True)
    name = Column(String(100), nullable=False)
    profile_id = Column(String(32), nullable=True)
    # Registration order; drives schedule enumeration and standings ties
    seq = Column(Integer, nullable=False, default=0)

    # Standings
    points = Column(Integer, default=0)
    played = Column(Integer, default=0)
    won = Column(Integer, default=0)
    lost = Column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<PlayerDB {self.name} ({self.points} pts)>"


class FixtureDB(Base):
    """SQLite table for fixtures."""

    __tablename__ = "fixtures"

    tournament_id = Column(String(32), ForeignKey("tournaments.id"), primary_key=True)
    match_number = Column(Integer, primary_key=True)
    round = Column(Integer, default=1)
    home_player_id = Column(String(32), nullable=False)
    away_player_id = Column(String(32), nullable=False)
    completed = Column(Boolean, default=False)
    winner_id = Column(String(32), nullable=True)

    def __repr__(self) -> str:
        return f"<FixtureDB #{self.match_number} {self.home_player_id} v {self.away_player_id}>"
