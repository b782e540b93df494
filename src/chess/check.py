"""
Check detection.

Only the pseudo-legal movement rules are used here. The legal move generator depends on this module,
so asking "is this move legal?" while looking for attackers would never terminate.
"""

from typing import Optional

from src.chess.board import Board
from src.chess.moves import pseudo_legal_moves
from src.chess.pieces import Color
from src.chess.square import Square
from src.chess.state import GameState


def is_square_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """
    Does any piece of `by_color` have a pseudo-legal move landing on `square`?

    NOTE: Meant for occupied squares (a king, a piece that might be hanging, the king placed on a castling square).
    For an empty square, a pawn push onto it would count as well.
    """
    for attacker_square in board.locate_color(by_color):
        if any(
            move.to_square == square
            for move in pseudo_legal_moves(attacker_square, board)
        ):
            return True
    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is the king of `color` attacked by any of the opponent's pieces?"""
    king_square = board.find_king(color)
    return is_square_attacked(board, king_square, color.opponent)


def is_state_in_check(state: GameState, color: Optional[Color] = None) -> bool:
    """Same question asked of a GameState. Defaults to the side to move."""
    return is_in_check(state.board, color or state.side_to_move)
