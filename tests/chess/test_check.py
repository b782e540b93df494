"""Unit tests for /src/chess/check.py"""

import pytest

from src.chess.board import Board
from src.chess.check import is_in_check, is_square_attacked, is_state_in_check
from src.chess.pieces import Color
from src.chess.square import Square
from src.chess.state import GameState
from src.core.exceptions import MissingKingError


def test_no_check_in_starting_position() -> None:
    board = Board.starting_position()
    assert not is_in_check(board, Color.WHITE)
    assert not is_in_check(board, Color.BLACK)


@pytest.mark.parametrize(
    "fen, color, expected",
    [
        ("4k3/8/8/8/8/8/8/4R1K1", Color.BLACK, True),  # rook down the open file
        ("4k3/4p3/8/8/8/8/8/4R1K1", Color.BLACK, False),  # the pawn blocks the line of sight
        ("8/8/8/3p4/4K3/8/8/7k", Color.WHITE, True),  # black pawns take downwards
        ("8/8/8/4p3/4K3/8/8/7k", Color.WHITE, False),  # pawns do not take straight ahead
        ("8/8/8/8/8/5n2/8/4K2k", Color.WHITE, True),  # knights jump
        ("7k/8/8/8/8/8/8/B3K3", Color.BLACK, True),  # the long diagonal
    ],
)
def test_is_in_check(fen: str, color: Color, expected: bool) -> None:
    assert is_in_check(Board.from_fen(fen), color) is expected


def test_is_square_attacked() -> None:
    """Asks about one specific square, for one specific attacking side"""
    board = Board.from_fen("4k3/8/8/3p4/8/8/8/3RK3")
    d5 = Square.from_algebraic("d5")
    assert is_square_attacked(board, d5, Color.WHITE)
    assert not is_square_attacked(board, d5, Color.BLACK)


def test_state_in_check_defaults_to_side_to_move() -> None:
    state = GameState.from_fen("4k3/8/8/8/8/8/8/4R1K1 b - - 0 1")
    assert is_state_in_check(state)
    assert not is_state_in_check(state, Color.WHITE)


def test_missing_king() -> None:
    with pytest.raises(MissingKingError):
        is_in_check(Board.from_fen("8/8/8/8/8/8/8/4R1K1"), Color.BLACK)
