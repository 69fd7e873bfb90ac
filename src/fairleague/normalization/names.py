"""Player name normalization for roster registration.

Names keep their accents for display. Duplicate detection compares a
folded key instead, so "José" and "jose " count as the same entrant.
"""

from __future__ import annotations

import re
import unicodedata

from unidecode import unidecode


def normalize_player_name(raw: str) -> str:
    """Strip, collapse internal whitespace and NFC-compose a name."""
    if not raw or not raw.strip():
        raise ValueError("Player name cannot be empty")

    name = unicodedata.normalize("NFC", raw.strip())
    return re.sub(r"\s+", " ", name)


def name_key(name: str) -> str:
    """Case- and accent-insensitive comparison key.

    Examples:
        "Zoë  Smith" → "zoe smith"
        "JOSÉ" → "jose"
    """
    return unidecode(normalize_player_name(name)).casefold()
