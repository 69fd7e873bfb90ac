"""Roster import from CSV.

Reads one entrant per row from a named column. Blank names are skipped,
and a name that folds to one already seen is dropped with a warning.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from fairleague.normalization.names import name_key, normalize_player_name

logger = logging.getLogger(__name__)


def load_roster_csv(source_path: str | Path, name_column: str = "name") -> list[str]:
    """Load player names from a CSV file in file order.

    Args:
        source_path: Path to the CSV file.
        name_column: Header of the column holding player names.

    Returns:
        Normalized, de-duplicated names.

    Raises:
        FileNotFoundError: If the file does not exist.
        KeyError: If ``name_column`` is missing from the header.
    """
    path = Path(source_path)
    if not path.exists():
        raise FileNotFoundError(f"Roster CSV not found: {source_path}")

    df = pd.read_csv(path, dtype=str)
    if name_column not in df.columns:
        raise KeyError(f"Column {name_column!r} not found in {path.name}")

    names: list[str] = []
    seen: set[str] = set()
    for idx, raw in df[name_column].items():
        if pd.isna(raw) or not str(raw).strip():
            logger.warning(f"Row {idx + 2}: blank player name, skipped")
            continue

        name = normalize_player_name(str(raw))
        key = name_key(name)
        if key in seen:
            logger.warning(f"Row {idx + 2}: duplicate player {name!r}, skipped")
            continue
        seen.add(key)
        names.append(name)

    logger.info(f"Loaded {len(names)} players from {path}")
    return names
