"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.executor import apply_move
from src.chess.moves import Move
from src.chess.state import GameState

PlayFn = Callable[..., GameState]


@pytest.fixture
def play() -> PlayFn:
    """Call the inner function with a state and any number of UCI moves. Moves are applied as given (no legality check)."""

    def _play(state: GameState, *uci_moves: str) -> GameState:
        for uci in uci_moves:
            state = apply_move(state, Move.from_uci(uci))
        return state

    return _play


@pytest.fixture
def starting_state() -> GameState:
    return GameState.starting_position()
