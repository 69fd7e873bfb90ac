"""Tests for player name normalization."""

import pytest

from fairleague.normalization.names import name_key, normalize_player_name


class TestNormalizePlayerName:
    def test_strips_and_collapses(self):
        assert normalize_player_name("  Ana   María  ") == "Ana María"

    def test_keeps_accents(self):
        assert normalize_player_name("Zoë") == "Zoë"

    def test_composes_unicode(self):
        decomposed = "Jose\u0301"
        assert normalize_player_name(decomposed) == "Jos\u00e9"

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_empty_rejected(self, raw):
        with pytest.raises(ValueError, match="empty"):
            normalize_player_name(raw)


class TestNameKey:
    def test_case_insensitive(self):
        assert name_key("ANA") == name_key("ana")

    def test_accent_insensitive(self):
        assert name_key("José") == name_key("jose") == "jose"

    def test_whitespace_insensitive(self):
        assert name_key(" Zoë  Smith ") == "zoe smith"

    def test_different_names_differ(self):
        assert name_key("Ana") != name_key("Anna")
