"""ja-typing: Kana to romaji input matching engine for typing practice.

This library judges romaji typing against a kana target one key at a time:
- Multiple live romaji spellings per kana (e.g. "si" / "ci" / "shi")
- Doubled consonants for "っ" and the optional redundant "n" for "ん"
- A full romaji preview regenerated after every accepted key

Rendering, keyboard handling and UI are left to the caller.
"""

from ja_typing.matcher import RomajiMatcher
from ja_typing.registry import KanaRomajiRegistry, get_registry
from ja_typing.session import TypingSession, default_romaji
from ja_typing.types import (
    CandidateKind,
    KanaUnit,
    MatchResult,
    MatchStatus,
    RomajiCandidate,
    TypingSnapshot,
)

__version__ = "0.1.0"
__all__ = [
    "CandidateKind",
    "KanaRomajiRegistry",
    "KanaUnit",
    "MatchResult",
    "MatchStatus",
    "RomajiCandidate",
    "RomajiMatcher",
    "TypingSession",
    "TypingSnapshot",
    "default_romaji",
    "get_registry",
]
