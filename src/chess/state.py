"""
The GameState: a complete snapshot of a game at one point in time.

Immutable. The Move Executor produces a new GameState for every move, the previous one stays valid
(which is all that is needed for history and undo). States are hashable, so they can be collected in sets or used as keys.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Self

from src.chess.board import Board
from src.chess.castling import CastlingRights
from src.chess.fen import split_fen
from src.chess.pieces import Color, Piece
from src.chess.square import Square


def empty_ledger() -> Mapping[Color, tuple[Piece, ...]]:
    return MappingProxyType({Color.WHITE: (), Color.BLACK: ()})


@dataclass(frozen=True)
class GameState:
    board: Board
    side_to_move: Color = Color.WHITE
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    en_passant_square: Optional[Square] = None
    half_move_clock: int = 0
    full_move_number: int = 1
    # pieces each color has taken from the opponent, in the order they were taken
    captured: Mapping[Color, tuple[Piece, ...]] = field(default_factory=empty_ledger)
    move_history: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # read-only copy: a successor state never shares a writable ledger with its predecessor
        object.__setattr__(self, "captured", MappingProxyType(dict(self.captured)))

    def __hash__(self) -> int:
        return hash(
            (
                self.board,
                self.side_to_move,
                self.castling_rights,
                self.en_passant_square,
                self.half_move_clock,
                self.full_move_number,
                frozenset(self.captured.items()),
                self.move_history,
            )
        )

    @classmethod
    def starting_position(cls) -> Self:
        """Standard setup: white to move, full castling rights, no en passant square, clocks at 0 / 1"""
        return cls(board=Board.starting_position())

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Parse the FEN into data. The captured ledger and move history start out empty."""
        parts = split_fen(fen)

        # Check which color is to move
        side_to_move = Color.WHITE if parts.active_color == "w" else Color.BLACK

        # parse en passant target square
        en_passant_square = (
            Square.from_algebraic(parts.en_passant)
            if parts.en_passant != "-"
            else None
        )

        return cls(
            board=Board.from_fen(parts.position),
            side_to_move=side_to_move,
            castling_rights=CastlingRights.from_fen(parts.castling),
            en_passant_square=en_passant_square,
            half_move_clock=int(parts.half_move_clock),
            full_move_number=int(parts.full_move_number),
        )

    def to_fen(self) -> str:
        """reverse operation: write a FEN from the given data"""
        active_color = "w" if self.side_to_move == Color.WHITE else "b"
        en_passant_algebraic = (
            self.en_passant_square.to_algebraic()
            if self.en_passant_square is not None
            else "-"
        )
        return (
            f"{self.board.to_fen()} {active_color} {self.castling_rights.to_fen()} "
            f"{en_passant_algebraic} {self.half_move_clock} {self.full_move_number}"
        )
