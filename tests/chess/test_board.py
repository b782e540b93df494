"""Unit tests for /src/chess/board.py"""

import pytest

from src.chess.board import Board
from src.chess.pieces import BACK_RANK_ORDER, Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import MissingKingError

EMPTY_FEN = "/".join(["8"] * 8)
STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

# -- CREATION LOGIC ---
def test_creating_board_in_starting_position() -> None:
    """ranks 1 and 8 hold the pieces in the fixed order, ranks 2 and 7 are all pawns, the rest is empty"""
    board = Board.starting_position()

    for file, piece_type in enumerate(BACK_RANK_ORDER):
        assert board.piece(Square(file, 0)) == Piece(piece_type, Color.WHITE)
        assert board.piece(Square(file, 1)) == Piece(PieceType.PAWN, Color.WHITE)
        assert board.piece(Square(file, 6)) == Piece(PieceType.PAWN, Color.BLACK)
        assert board.piece(Square(file, 7)) == Piece(piece_type, Color.BLACK)

    for rank in range(2, 6):
        for file in range(8):
            assert board.is_empty(Square(file, rank))

def test_starting_position_matches_fen() -> None:
    assert Board.starting_position() == Board.from_fen(STARTING_POSITION_FEN)
    assert Board.starting_position().to_fen() == STARTING_POSITION_FEN

def test_creating_board_after_e4() -> None:
    """Say, white moves the pawn from e2 to e4, and I want to load up the board in this position"""
    e4_fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"
    board = Board.from_fen(e4_fen)
    assert board.piece(Square.from_algebraic("e4")) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.is_empty(Square.from_algebraic("e2"))
    assert board.to_fen() == e4_fen

@pytest.mark.parametrize(
    "fen",
    [
        EMPTY_FEN,
        "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1",
        "8/8/8/3k4/8/8/8/4K3",
    ],
)
def test_fen_roundtrip(fen: str) -> None:
    assert Board.from_fen(fen).to_fen() == fen

def test_empty_board() -> None:
    board = Board.from_fen(EMPTY_FEN)
    assert board.to_fen() == EMPTY_FEN
    assert board.locate_color(Color.WHITE) == []

# -- QUERIES --
def test_locate_pieces() -> None:
    board = Board.starting_position()
    rooks = board.locate_pieces(PieceType.ROOK, Color.BLACK)
    assert set(rooks) == {Square.from_algebraic("a8"), Square.from_algebraic("h8")}
    assert len(board.locate_color(Color.WHITE)) == 16

def test_find_king() -> None:
    board = Board.starting_position()
    assert board.find_king(Color.WHITE) == Square.from_algebraic("e1")
    assert board.find_king(Color.BLACK) == Square.from_algebraic("e8")

def test_missing_king_is_an_error() -> None:
    """Not a normal game outcome: the board itself is broken"""
    board = Board.from_fen("8/8/8/3k4/8/8/8/8")
    with pytest.raises(MissingKingError):
        board.find_king(Color.WHITE)

def test_is_any_occupied() -> None:
    board = Board.starting_position()
    f1_g1 = [Square.from_algebraic("f1"), Square.from_algebraic("g1")]
    assert board.is_any_occupied(f1_g1)
    assert not board.is_any_occupied([Square.from_algebraic("e4")])

# -- COPY ON WRITE --
def test_move_piece_returns_new_board() -> None:
    """The original board is never touched"""
    board = Board.starting_position()
    e2 = Square.from_algebraic("e2")
    e4 = Square.from_algebraic("e4")

    new_board = board.move_piece(e2, e4)

    assert new_board.piece(e4) == Piece(PieceType.PAWN, Color.WHITE)
    assert new_board.is_empty(e2)
    assert board.piece(e2) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.is_empty(e4)
    assert board == Board.starting_position()

def test_move_piece_onto_occupied_square_replaces_it() -> None:
    board = Board.from_fen("8/8/8/3p4/8/8/8/3R4")
    d1 = Square.from_algebraic("d1")
    d5 = Square.from_algebraic("d5")
    new_board = board.move_piece(d1, d5)
    assert new_board.piece(d5) == Piece(PieceType.ROOK, Color.WHITE)
    assert new_board.locate_color(Color.BLACK) == []

def test_remove_and_place_piece() -> None:
    board = Board.from_fen(EMPTY_FEN)
    d4 = Square.from_algebraic("d4")
    queen = Piece(PieceType.QUEEN, Color.BLACK)

    with_queen = board.place_piece(queen, d4)
    assert with_queen.piece(d4) == queen
    assert board.is_empty(d4)

    without_queen = with_queen.remove_piece(d4)
    assert without_queen.is_empty(d4)
    assert with_queen.piece(d4) == queen

def test_position_is_read_only() -> None:
    board = Board.starting_position()
    with pytest.raises(TypeError):
        board.position[Square.from_algebraic("e4")] = Piece(PieceType.QUEEN, Color.WHITE)
    assert board.is_empty(Square.from_algebraic("e4"))

def test_boards_are_hashable() -> None:
    """Equal positions hash alike, whichever way they were built"""
    e2 = Square.from_algebraic("e2")
    e4 = Square.from_algebraic("e4")
    after_e4 = Board.starting_position().move_piece(e2, e4)
    same_position = Board.from_fen("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR")

    assert after_e4 == same_position
    assert hash(after_e4) == hash(same_position)
    assert len({Board.starting_position(), Board.starting_position(), after_e4}) == 2
