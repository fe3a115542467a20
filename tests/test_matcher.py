"""Tests for RomajiMatcher."""

import pytest

from ja_typing.matcher import RomajiMatcher
from ja_typing.types import TENTATIVE_KANA_LENGTH, CandidateKind, MatchStatus


@pytest.fixture
def shi_matcher():
    """Create a matcher prepared for "し"."""
    matcher = RomajiMatcher()
    for spelling in ("si", "ci", "shi"):
        matcher.add_candidate(spelling, 1)
    return matcher


class TestMatcherState:
    """Test reset() and state properties."""

    def test_initial_state(self):
        """Test a fresh matcher."""
        matcher = RomajiMatcher()
        assert matcher.is_empty
        assert not matcher.is_complete
        assert matcher.consumed_char_count == 0
        assert list(matcher.spellings()) == []

    def test_add_candidate_keeps_order(self, shi_matcher):
        """Test that candidates keep insertion priority."""
        assert list(shi_matcher.spellings()) == ["si", "ci", "shi"]
        assert len(shi_matcher) == 3
        assert shi_matcher.top_priority().spelling == "si"

    def test_add_candidate_kind(self):
        """Test that the candidate tag is stored."""
        matcher = RomajiMatcher()
        matcher.add_candidate("n", TENTATIVE_KANA_LENGTH, CandidateKind.MORAIC_N)
        candidate = matcher.top_priority()
        assert candidate.kind is CandidateKind.MORAIC_N
        assert candidate.is_tentative

    def test_reset(self, shi_matcher):
        """Test that reset clears candidates and cursor."""
        shi_matcher.try_match("s")
        shi_matcher.reset()
        assert shi_matcher.is_empty
        assert shi_matcher.consumed_char_count == 0
        assert not shi_matcher.is_complete

    def test_top_priority_on_empty_raises(self):
        """Test that top_priority() requires live candidates."""
        with pytest.raises(RuntimeError):
            RomajiMatcher().top_priority()


class TestTryMatch:
    """Test try_match() transitions."""

    def test_rejected_leaves_state(self, shi_matcher):
        """Test that a non-matching character changes nothing."""
        result = shi_matcher.try_match("x")
        assert result.status is MatchStatus.REJECTED
        assert result.candidate is None
        assert list(shi_matcher.spellings()) == ["si", "ci", "shi"]
        assert shi_matcher.consumed_char_count == 0

    def test_advanced_narrows(self, shi_matcher):
        """Test that advancing drops candidates that no longer match."""
        result = shi_matcher.try_match("s")
        assert result.status is MatchStatus.ADVANCED
        assert list(shi_matcher.spellings()) == ["si", "shi"]
        assert shi_matcher.consumed_char_count == 1
        assert shi_matcher.top_priority().spelling == "si"

    def test_switch_to_lower_priority(self, shi_matcher):
        """Test that a lower priority spelling can still be completed."""
        shi_matcher.try_match("s")
        assert shi_matcher.try_match("h").status is MatchStatus.ADVANCED
        assert list(shi_matcher.spellings()) == ["shi"]
        result = shi_matcher.try_match("i")
        assert result.status is MatchStatus.COMPLETED
        assert result.candidate.spelling == "shi"
        assert shi_matcher.is_complete

    def test_completed_reports_kana_length(self):
        """Test that completion carries the consumed kana length."""
        matcher = RomajiMatcher()
        matcher.add_candidate("kya", 2, CandidateKind.DIGRAPH)
        matcher.add_candidate("ki", 1)
        for key in "ky":
            matcher.try_match(key)
        result = matcher.try_match("a")
        assert result.candidate.kana_length == 2
        assert result.candidate.kind is CandidateKind.DIGRAPH

    def test_earliest_declared_wins_on_completion(self):
        """Test the tie-break when several candidates complete together."""
        matcher = RomajiMatcher()
        matcher.add_candidate("zu", 1)
        matcher.add_candidate("zu", 2, CandidateKind.DIGRAPH)
        matcher.try_match("z")
        result = matcher.try_match("u")
        assert result.candidate.kana_length == 1

    def test_completion_beats_longer_candidate(self):
        """Test that a completing candidate stops the scan immediately."""
        matcher = RomajiMatcher()
        matcher.add_candidate("n", TENTATIVE_KANA_LENGTH, CandidateKind.MORAIC_N)
        matcher.add_candidate("nn", 1)
        result = matcher.try_match("n")
        assert result.status is MatchStatus.COMPLETED
        assert result.candidate.kind is CandidateKind.MORAIC_N

    def test_top_priority_after_completion_raises(self):
        """Test that top_priority() is undefined once complete."""
        matcher = RomajiMatcher()
        matcher.add_candidate("a", 1)
        matcher.try_match("a")
        with pytest.raises(RuntimeError):
            matcher.top_priority()

    def test_live_candidates_agree_on_prefix(self):
        """Test the invariant that live candidates share the typed prefix."""
        matcher = RomajiMatcher()
        for spelling in ("tya", "cha", "cya", "ti", "chi"):
            matcher.add_candidate(spelling, 1)
        typed = ""
        for key in "ch":
            matcher.try_match(key)
            typed += key
            for spelling in matcher.spellings():
                assert spelling.startswith(typed)
                assert len(spelling) > matcher.consumed_char_count
        assert list(matcher.spellings()) == ["cha", "chi"]

    def test_accepts_does_not_change_state(self, shi_matcher):
        """Test that accepts() only looks at the current position."""
        assert shi_matcher.accepts("s")
        assert shi_matcher.accepts("c")
        assert not shi_matcher.accepts("h")
        assert shi_matcher.consumed_char_count == 0
        shi_matcher.try_match("s")
        assert shi_matcher.accepts("h")
        assert list(shi_matcher.spellings()) == ["si", "shi"]
