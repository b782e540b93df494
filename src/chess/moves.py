"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the pseudo-legal move sets for each piece type.

Pseudo-legal: follows the movement pattern of the piece and the occupancy of the board, but does NOT
look at whether your own king is left in check. That is checked later by the legal move generator.
Castling is not part of this tier either (it needs to know about attacked squares).
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e1g1": the king castles king side

        NOTE: Pawns always promote to a queen, so a promotion suffix ("e7e8q") is accepted and ignored.
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


# --- DIRECTIONS ---
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


def pawn_start_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_DIMENSIONS[1] - 2


def promotion_rank(color: Color) -> int:
    return BOARD_DIMENSIONS[1] - 1 if color == Color.WHITE else 0


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    player_color = board.piece(square).color

    moves: list[Move] = []
    for df, dr in directions:
        target_square = square.offset(df, dr)
        while target_square is not None:
            if not board.is_empty(target_square):
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if board.piece(target_square).color != player_color:
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
            target_square = target_square.offset(df, dr)
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    player_color = board.piece(square).color
    moves: list[Move] = []
    for df, dr in deltas:
        target_square = square.offset(df, dr)
        if target_square is None:
            continue

        target_piece = board.piece(target_square)
        if target_piece is None or target_piece.color != player_color:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


def candidate_pawn_moves(
    square: Square, board: Board, en_passant_square: Optional[Square] = None
) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally, or onto the en passant square (the enemy pawn it takes stands behind that square)
    """
    color = board.piece(square).color
    forward = color.forward
    moves: list[Move] = []

    one_step = square.offset(0, forward)
    if one_step is not None and board.is_empty(one_step):
        moves.append(Move(from_square=square, to_square=one_step))

        two_steps = one_step.offset(0, forward)
        if (
            square.rank == pawn_start_rank(color)
            and two_steps is not None
            and board.is_empty(two_steps)
        ):
            moves.append(Move(from_square=square, to_square=two_steps))

    for df in (1, -1):
        target_square = square.offset(df, forward)
        if target_square is None:
            continue
        target_piece = board.piece(target_square)
        is_opponent_piece = target_piece is not None and target_piece.color != color
        if is_opponent_piece or target_square == en_passant_square:
            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def candidate_knight_moves(
    square: Square, board: Board, en_passant_square: Optional[Square] = None
) -> list[Move]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(
    square: Square, board: Board, en_passant_square: Optional[Square] = None
) -> list[Move]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(
    square: Square, board: Board, en_passant_square: Optional[Square] = None
) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(
    square: Square, board: Board, en_passant_square: Optional[Square] = None
) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    diagonal_moves = candidate_bishop_moves(square, board)
    horizontal_and_vertical_moves = candidate_rook_moves(square, board)
    return diagonal_moves + horizontal_and_vertical_moves


def candidate_king_moves(
    square: Square, board: Board, en_passant_square: Optional[Square] = None
) -> list[Move]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled by the legal move generator).
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board, Optional[Square]], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def pseudo_legal_moves(
    square: Square, board: Board, en_passant_square: Optional[Square] = None
) -> list[Move]:
    """Dispatch to the movement rule of whatever piece stands on the square (nothing for an empty square)."""
    piece = board.piece(square)
    if piece is None:
        return []
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(square, board, en_passant_square)


# -- MOVE CLASSIFICATION ---
def is_castling_move(move: Move, piece: Piece) -> bool:
    """The king moving two files at once"""
    return (
        piece.type == PieceType.KING
        and abs(move.to_square.file - move.from_square.file) == 2
    )


def is_en_passant_move(
    move: Move, piece: Piece, en_passant_square: Optional[Square]
) -> bool:
    """A pawn moving diagonally onto the en passant square"""
    return (
        piece.type == PieceType.PAWN
        and en_passant_square is not None
        and move.to_square == en_passant_square
        and move.from_square.file != move.to_square.file
    )


def is_double_pawn_push(move: Move, piece: Piece) -> bool:
    return (
        piece.type == PieceType.PAWN
        and abs(move.to_square.rank - move.from_square.rank) == 2
    )


def is_pawn_push_to_promotion_square(move: Move, piece: Piece) -> bool:
    """check if the move is a pawn move that reaches the far rank for its color"""
    return piece.type == PieceType.PAWN and move.to_square.rank == promotion_rank(
        piece.color
    )


def en_passant_victim_square(move: Move) -> Square:
    """
    The pawn taken en passant is not on the destination square.
    It stands in the same file as the destination, on the rank the moving pawn started from.
    """
    return Square(file=move.to_square.file, rank=move.from_square.rank)
