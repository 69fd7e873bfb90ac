"""Tournament rules loaded from config/rules.json.

Only caller-side policy lives here. The scheduler weighting and points per
win are fixed and deliberately not exposed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent.parent.parent / "config" / "rules.json"


class TournamentRules(BaseModel):
    """Tunable tournament policy."""
    min_league_players: int = Field(default=3, ge=2)
    matches_per_page: int = Field(default=10, ge=1, description="Upcoming fixtures per page")
    default_home_away: bool = Field(default=True)

    model_config = {"extra": "ignore"}


def load_rules(rules_path: str | Path | None = None) -> TournamentRules:
    """Load rules from JSON, falling back to defaults if the file is missing.

    Reads the ``"tournament"`` section of the file; unknown keys are ignored.
    """
    path = Path(rules_path) if rules_path else DEFAULT_RULES_PATH
    if not path.exists():
        logger.warning(f"Rules file not found: {path}, using defaults")
        return TournamentRules()

    with open(path) as f:
        rules = json.load(f)

    return TournamentRules(**rules.get("tournament", {}))
