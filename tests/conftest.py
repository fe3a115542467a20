"""Pytest configuration and shared fixtures."""

import pytest

from ja_typing.registry import KanaRomajiRegistry, get_registry
from ja_typing.session import TypingSession


@pytest.fixture(scope="session")
def registry():
    """
    The built-in registry shared by every test.

    Returns:
        KanaRomajiRegistry: The process-wide registry
    """
    return get_registry()


@pytest.fixture
def small_registry():
    """
    Create a registry with a handful of entries for isolated tests.

    Returns:
        KanaRomajiRegistry: A registry without most of the kana inventory
    """
    return KanaRomajiRegistry({"か": ("ka", "ca"), "き": ("ki",), "きゃ": ("kya",)})


@pytest.fixture
def type_keys():
    """
    Return a helper that feeds keys into a session one by one.

    The helper returns the list of results of TypingSession.input().
    """

    def _type(session: TypingSession, keys: str) -> list[bool]:
        return [session.input(key) for key in keys]

    return _type
