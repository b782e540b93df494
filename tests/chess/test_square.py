"""Unit tests for /src/chess/square.py"""

from string import ascii_lowercase

import pytest

from src.chess.square import ALL_SQUARES, BOARD_DIMENSIONS, Square, is_within_bounds


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to file 0, rank 0, etc."""
    square = Square.from_algebraic(notation)
    assert square.file == file
    assert square.rank == rank
    assert square.to_algebraic() == notation


def test_square_within_bounds() -> None:
    """happy case: every coordinate on the board"""
    for file in range(BOARD_DIMENSIONS[0]):
        for rank in range(BOARD_DIMENSIONS[1]):
            assert is_within_bounds(file, rank)


@pytest.mark.parametrize("file, rank", [(8, 0), (0, 8), (-1, 3), (3, -1), (42, 23)])
def test_square_out_of_bounds_cannot_be_created(file: int, rank: int) -> None:
    """Squares off the board do not exist. Creating one is a programming error."""
    assert not is_within_bounds(file, rank)
    with pytest.raises(ValueError):
        Square(file, rank)


def test_offset_stays_on_board() -> None:
    e4 = Square.from_algebraic("e4")
    assert e4.offset(1, 1) == Square.from_algebraic("f5")
    assert e4.offset(-4, -3) == Square.from_algebraic("a1")


def test_offset_off_the_board() -> None:
    """Stepping off the edge gives None instead of an invalid square"""
    h8 = Square.from_algebraic("h8")
    assert h8.offset(1, 0) is None
    assert h8.offset(0, 1) is None
    assert Square.from_algebraic("a1").offset(-1, -1) is None


def test_all_squares() -> None:
    assert len(ALL_SQUARES) == 64
    assert len(set(ALL_SQUARES)) == 64
