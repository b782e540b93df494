"""The Board holds the `position` (in chess: the configuration of pieces on the board).

A Board is a value: none of its methods edit it in place. Every change hands back a fresh copy,
so a Board shared with an older GameState is never affected by later moves.
The position itself is a read-only view, and boards can be hashed (e.g. to spot repeated positions).
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Self

from src.chess.pieces import BACK_RANK_ORDER, Color, Piece, PieceType
from src.chess.square import ALL_SQUARES, BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidFENError, MissingKingError


@dataclass(frozen=True)
class Board:
    position: Mapping[Square, Optional[Piece]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", MappingProxyType(dict(self.position)))

    def __hash__(self) -> int:
        return hash(frozenset(self.position.items()))

    @classmethod
    def starting_position(cls) -> Self:
        """Pawns on the 2nd and 7th rank, the other pieces behind them in the fixed back rank order."""
        position: dict[Square, Optional[Piece]] = {square: None for square in ALL_SQUARES}
        for file, piece_type in enumerate(BACK_RANK_ORDER):
            position[Square(file, 0)] = Piece(piece_type, Color.WHITE)
            position[Square(file, 1)] = Piece(PieceType.PAWN, Color.WHITE)
            position[Square(file, 6)] = Piece(PieceType.PAWN, Color.BLACK)
            position[Square(file, 7)] = Piece(piece_type, Color.BLACK)
        return cls(position)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using a given FEN string.

        That is, we supply the first part of the FEN string that denotes the board position
        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.
        """
        position: dict[Square, Optional[Piece]] = {square: None for square in ALL_SQUARES}
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[1]:
            raise InvalidFENError(f"Expected {BOARD_DIMENSIONS[1]} ranks in: {fen_str}")

        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_DIMENSIONS[1] - 1 - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 0
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                    continue
                if file >= BOARD_DIMENSIONS[0]:
                    raise InvalidFENError(f"Rank {rank + 1} too long in: {fen_str}")
                position[Square(file, rank)] = Piece.from_fen(character)
                file += 1
        return cls(position)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece(Square(file, rank))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.position[square]

    def is_empty(self, square: Square) -> bool:
        return self.position[square] is None

    def is_any_occupied(self, squares: list[Square]) -> bool:
        return any(not self.is_empty(square) for square in squares)

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece is not None and piece.type == piece_type and piece.color == color
        ]

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece is not None and piece.color == color
        ]

    def find_king(self, color: Color) -> Square:
        """Every legal board has exactly one king per color. Not finding it is a bug, not a game outcome."""
        kings = self.locate_pieces(PieceType.KING, color)
        if not kings:
            raise MissingKingError(f"No {color} king on the board: {self.to_fen()}")
        return kings[0]

    # --- COPY-ON-WRITE UPDATES ---
    def move_piece(self, from_square: Square, to_square: Square) -> Self:
        """New board with the piece relocated (whatever stood on `to_square` is gone)"""
        position = dict(self.position)
        position[to_square] = position[from_square]
        position[from_square] = None
        return type(self)(position)

    def remove_piece(self, square: Square) -> Self:
        position = dict(self.position)
        position[square] = None
        return type(self)(position)

    def place_piece(self, piece: Optional[Piece], square: Square) -> Self:
        position = dict(self.position)
        position[square] = piece
        return type(self)(position)
