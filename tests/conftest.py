"""
Pytest configuration and fixtures for lifeduel tests.
"""

import pytest

from lifeduel.core.game import MultiplayerGame
from lifeduel.core.patterns import PatternLibrary


@pytest.fixture
def empty_game() -> MultiplayerGame:
    """Small empty game for rule tests."""
    return MultiplayerGame(10, 10)


@pytest.fixture
def library() -> PatternLibrary:
    """Pattern library with the built-in patterns."""
    return PatternLibrary()
