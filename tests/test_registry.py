"""Tests for KanaRomajiRegistry."""

import pytest

from ja_typing.registry import (
    MAX_PATTERN_CAPACITY,
    MAX_ROMAJI_LENGTH,
    ROMAJI_TABLE,
    KanaRomajiRegistry,
    get_registry,
)
from ja_typing.types import KanaUnit


class TestRegistryConstruction:
    """Test registry construction."""

    def test_get_registry_is_shared(self):
        """Test that the built-in registry is built once and shared."""
        assert get_registry() is get_registry()

    def test_contains_whole_table(self, registry):
        """Test that every table entry is registered."""
        assert len(registry) == len(ROMAJI_TABLE)

    def test_table_constraints(self):
        """Test that the literal table respects length limits."""
        for key, spellings in ROMAJI_TABLE.items():
            assert 1 <= len(key) <= 2
            assert 0 < len(spellings) <= MAX_PATTERN_CAPACITY
            for spelling in spellings:
                assert 1 <= len(spelling) <= MAX_ROMAJI_LENGTH

    def test_invalid_key(self):
        """Test that keys longer than two kana are rejected."""
        with pytest.raises(ValueError, match="1 or 2 characters"):
            KanaRomajiRegistry({"きゃあ": ("kyaa",)})

    def test_invalid_spelling(self):
        """Test that over-long spellings are rejected."""
        with pytest.raises(ValueError, match="Invalid romaji pattern"):
            KanaRomajiRegistry({"か": ("kaaaa",)})

    def test_custom_table(self, small_registry):
        """Test building a registry from a custom table."""
        assert len(small_registry) == 3
        assert small_registry.candidates_for(KanaUnit(kana="か")) == ("ka", "ca")
        assert not small_registry.has(KanaUnit(kana="し"))


class TestCandidatesFor:
    """Test candidates_for() lookup."""

    def test_single_kana_priority_order(self, registry):
        """Test that spellings keep their declared priority."""
        assert registry.candidates_for(KanaUnit(kana="し")) == ("si", "ci", "shi")
        assert registry.candidates_for(KanaUnit(kana="ふ")) == ("fu", "hu")

    def test_digraph_exact_match(self, registry):
        """Test lookup of a digraph entry."""
        assert registry.candidates_for(KanaUnit(kana="き", next_kana="ゃ")) == ("kya",)
        assert registry.candidates_for(KanaUnit(kana="ち", next_kana="ゃ")) == (
            "tya",
            "cha",
            "cya",
        )

    def test_falls_back_to_single_kana(self, registry):
        """Test fallback when the pair has no digraph entry."""
        unit = KanaUnit(kana="か", next_kana="な")
        assert registry.candidates_for(unit) == ("ka", "ca")

    def test_unknown_kana_is_empty(self, registry):
        """Test that unknown characters yield no spellings."""
        assert registry.candidates_for(KanaUnit(kana="カ")) == ()
        assert registry.candidates_for(KanaUnit(kana="漢", next_kana="字")) == ()

    def test_idempotent(self, registry):
        """Test that repeated lookups return the same ordered spellings."""
        unit = KanaUnit(kana="じ", next_kana="ょ")
        first = registry.candidates_for(unit)
        for _ in range(3):
            assert registry.candidates_for(unit) == first

    def test_small_kana_and_punctuation(self, registry):
        """Test small kana, sokuon, moraic n and punctuation entries."""
        assert registry.candidates_for(KanaUnit(kana="っ")) == ("xtu", "ltu", "xtsu", "ltsu")
        assert registry.candidates_for(KanaUnit(kana="ん")) == ("nn", "xn")
        assert registry.candidates_for(KanaUnit(kana="ゃ")) == ("lya", "xya")
        for kana, romaji in {"ー": "-", "「": "[", "」": "]", "、": ",", "。": "."}.items():
            assert registry.candidates_for(KanaUnit(kana=kana)) == (romaji,)


class TestPairCandidates:
    """Test pair_candidates() and membership helpers."""

    def test_pair_candidates_with_digraph(self, registry):
        """Test that single and digraph spellings are split."""
        single, digraph = registry.pair_candidates(KanaUnit(kana="し", next_kana="ゃ"))
        assert single == ("si", "ci", "shi")
        assert digraph == ("sya", "sha")

    def test_pair_candidates_without_lookahead(self, registry):
        """Test that no digraph spellings are returned without lookahead."""
        single, digraph = registry.pair_candidates(KanaUnit(kana="し"))
        assert single == ("si", "ci", "shi")
        assert digraph == ()

    def test_pair_candidates_without_digraph(self, registry):
        """Test a pair that has no digraph entry."""
        single, digraph = registry.pair_candidates(KanaUnit(kana="か", next_kana="き"))
        assert single == ("ka", "ca")
        assert digraph == ()

    def test_has_and_contains(self, registry):
        """Test has() and the in operator."""
        assert registry.has(KanaUnit(kana="あ"))
        assert KanaUnit(kana="あ") in registry
        assert KanaUnit(kana="A") not in registry
        assert "あ" not in registry
