"""Unit tests for /src/chess/fen.py"""

import pytest

from src.chess.fen import (
    is_en_passant_on_expected_rank,
    is_valid_castling_rights,
    is_valid_en_passant,
    is_valid_fen,
    is_valid_position,
    split_fen,
)
from src.core.exceptions import InvalidFENError

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_FEN,
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
        "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1 b kq - 3 9",
        "8/8/8/8/8/8/8/k6K w - - 0 1",
    ],
)
def test_valid_fen(fen: str) -> None:
    assert is_valid_fen(fen)


@pytest.mark.parametrize(
    "fen",
    [
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0",  # only 5 space-separated values
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 extra",  # too many space-separated values
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",  # 7 ranks
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",  # color
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq z9 0 1",  # en passant square
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR w KQkq e3 0 1",  # white to move, but white just pushed
        "rnbqkbnr/pppp1ppp/8/4p3/8/8/PPPPPPPP/RNBQKBNR b KQkq e6 0 1",  # black to move, but black just pushed
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e5 0 1",  # en passant square on a middle rank
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - a 1",  # counter
    ],
)
def test_invalid_fen(fen: str) -> None:
    assert not is_valid_fen(fen)
    with pytest.raises(InvalidFENError):
        split_fen(fen)


@pytest.mark.parametrize(
    "position, expected",
    [
        ("8/8/8/8/8/8/8/8", True),
        ("9/8/8/8/8/8/8/8", False),  # rank too long
        ("7/8/8/8/8/8/8/8", False),  # rank too short
        ("x7/8/8/8/8/8/8/8", False),  # unknown piece
    ],
)
def test_position_validation(position: str, expected: bool) -> None:
    assert is_valid_position(position) is expected


@pytest.mark.parametrize(
    "castling, expected",
    [("-", True), ("KQkq", True), ("Kq", True), ("qK", False), ("KK", False), ("X", False), ("", False)],
)
def test_castling_validation(castling: str, expected: bool) -> None:
    assert is_valid_castling_rights(castling) is expected


@pytest.mark.parametrize("en_passant, expected", [("-", True), ("e3", True), ("i3", False), ("e9", False), ("e", False)])
def test_en_passant_validation(en_passant: str, expected: bool) -> None:
    assert is_valid_en_passant(en_passant) is expected


def test_split_fen() -> None:
    parts = split_fen(STARTING_FEN)
    assert parts.position == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
    assert parts.active_color == "w"
    assert parts.castling == "KQkq"
    assert parts.en_passant == "-"
    assert parts.half_move_clock == "0"
    assert parts.full_move_number == "1"


@pytest.mark.parametrize(
    "color, en_passant, expected",
    [
        ("w", "-", True),
        ("b", "-", True),
        ("w", "d6", True),
        ("b", "e3", True),
        ("w", "d3", False),
        ("b", "e6", False),
        ("w", "e5", False),
        ("b", "e4", False),
    ],
)
def test_en_passant_rank_validation(color: str, en_passant: str, expected: bool) -> None:
    assert is_en_passant_on_expected_rank(color, en_passant) is expected
