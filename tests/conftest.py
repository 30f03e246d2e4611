"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chesscore.core.notation import STARTING_FEN, position_from_fen
from chesscore.core.position import Position
from chesscore.game import Game


@pytest.fixture
def start_position() -> Position:
    return position_from_fen(STARTING_FEN)


@pytest.fixture
def game() -> Game:
    return Game.new()
