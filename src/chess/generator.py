"""
Legal move generation
----

**Combines the following**

1. generate candidate moves, using the basic movement rules for the piece (see moves.py)
2. add candidate castling moves for the king
3. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.

Only the side to move has legal moves. Asking for the moves of an empty square or an opponent's piece gives an empty list.
"""

from src.chess.castling import CASTLING_RULES, castling_options
from src.chess.check import is_in_check, is_square_attacked
from src.chess.executor import trial_move
from src.chess.moves import Move, pseudo_legal_moves
from src.chess.pieces import Piece, PieceType
from src.chess.square import Square
from src.chess.state import GameState


def legal_destinations(state: GameState, square: Square) -> list[Square]:
    """The squares the piece on `square` may legally move to."""
    return [move.to_square for move in legal_moves_from(state, square)]


def legal_moves_from(state: GameState, square: Square) -> list[Move]:
    piece = state.board.piece(square)
    if piece is None or piece.color != state.side_to_move:
        return []

    candidate_moves = pseudo_legal_moves(square, state.board, state.en_passant_square)
    if piece.type == PieceType.KING:
        candidate_moves.extend(castling_moves(state, square))

    # keep those moves that do not put (or leave) you in check
    return [
        move for move in candidate_moves if not _is_putting_yourself_in_check(state, move)
    ]


def legal_moves(state: GameState) -> list[Move]:
    """Every legal move of the side to move, piece by piece."""
    moves: list[Move] = []
    for square in state.board.locate_color(state.side_to_move):
        moves.extend(legal_moves_from(state, square))
    return moves


def has_legal_move(state: GameState) -> bool:
    """Stops at the first piece that can move."""
    return any(
        legal_moves_from(state, square)
        for square in state.board.locate_color(state.side_to_move)
    )


def is_legal_move(state: GameState, move: Move) -> bool:
    return move in legal_moves_from(state, move.from_square)


def _is_putting_yourself_in_check(state: GameState, move: Move) -> bool:
    """Return True if the move puts you in check

    plan:
    1. make the candidate move on a copy (trial move, no bookkeeping)
    2. determine if your king is in check on the new board
    """
    player_color = state.side_to_move
    after_move = trial_move(state, move)
    return is_in_check(after_move.board, player_color)


# -- CASTLING RULE HELPERS ---
def castling_moves(state: GameState, king_square: Square) -> list[Move]:
    """
    Find the legal castling moves for the player to move
    ---

    **you are allowed to castle if**

    * Castling rights are not yet revoked (and king and rook are standing on their starting squares).
    * There is no piece in between the king and the rook of choice.
    * You are not currently in check (you cannot castle out of check).
    * The king does not pass through or land on a square under attack.
    """
    player_color = state.side_to_move
    if not state.castling_rights.has_any(player_color):
        return []

    board = state.board
    king = Piece(PieceType.KING, player_color)
    rook = Piece(PieceType.ROOK, player_color)
    opponent_color = player_color.opponent

    moves: list[Move] = []
    for direction in castling_options(player_color):
        if not state.castling_rights.has(direction):
            continue

        squares = CASTLING_RULES[direction]
        if squares.king_from != king_square or board.piece(king_square) != king:
            continue
        if board.piece(squares.rook_from) != rook:
            continue

        # Cannot castle if any of the squares in between is occupied
        if board.is_any_occupied(squares.path()):
            continue

        # walk the king along its path: starting square (no castling out of check), transit square, destination
        walked_into_attack = False
        for transit_square in squares.king_transit():
            board_w_king_on_transit = (
                board
                if transit_square == king_square
                else board.move_piece(king_square, transit_square)
            )
            if is_square_attacked(board_w_king_on_transit, transit_square, opponent_color):
                walked_into_attack = True
                break
        if walked_into_attack:
            continue

        # survived the checks? add to legal castling moves.
        moves.append(Move(from_square=king_square, to_square=squares.king_to))

    return moves
