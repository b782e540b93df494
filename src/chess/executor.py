"""
Move execution: GameState in, new GameState out.

Two flavours:
* `apply_move()` commits a move with all the bookkeeping (clocks, castling rights, en passant square, captured pieces, notation).
* `trial_move()` only moves the pieces and hands the turn over. The legal move generator uses it to see
  whether a move would leave your own king in check, and the automated opponent to look one ply ahead.

Neither of them checks legality: the caller already knows the destination can be reached.
"""

from dataclasses import dataclass, replace
from typing import Mapping, Optional, Self

from src.chess.board import Board
from src.chess.castling import (
    CASTLING_RULES,
    CastlingDirection,
    CastlingRights,
    castling_direction_for,
    castling_options,
)
from src.chess.moves import (
    Move,
    en_passant_victim_square,
    is_castling_move,
    is_double_pawn_push,
    is_en_passant_move,
    is_pawn_push_to_promotion_square,
)
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.chess.state import GameState
from src.core.exceptions import IllegalMoveError


@dataclass(frozen=True)
class AcceptedMove:
    """Snapshot of the moving pieces before the updates are done."""

    move: Move
    moving_piece: Piece
    captured_piece: Optional[Piece]
    castling_direction: Optional[CastlingDirection] = None
    is_en_passant: bool = False
    is_promotion: bool = False

    @classmethod
    def from_move_and_state(cls, move: Move, state: GameState) -> Self:
        moving_piece = state.board.piece(move.from_square)
        if moving_piece is None:
            raise IllegalMoveError(f"No piece to move on {move.from_square.to_algebraic()}")

        castling_direction = (
            castling_direction_for(move.from_square, move.to_square)
            if is_castling_move(move, moving_piece)
            else None
        )
        is_en_passant = is_en_passant_move(move, moving_piece, state.en_passant_square)
        captured_piece = (
            state.board.piece(en_passant_victim_square(move))
            if is_en_passant
            else state.board.piece(move.to_square)
        )
        return cls(
            move=move,
            moving_piece=moving_piece,
            captured_piece=captured_piece,
            castling_direction=castling_direction,
            is_en_passant=is_en_passant,
            is_promotion=is_pawn_push_to_promotion_square(move, moving_piece),
        )

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    @property
    def is_pawn_move(self) -> bool:
        return self.moving_piece.type == PieceType.PAWN


def trial_move(state: GameState, move: Move) -> GameState:
    """
    Only the board and the side to move change.
    Clocks, castling rights, en passant square, captured pieces and history are copied over untouched.
    """
    accepted_move = AcceptedMove.from_move_and_state(move, state)
    return replace(
        state,
        board=update_board(state.board, accepted_move),
        side_to_move=state.side_to_move.opponent,
    )


def apply_move(state: GameState, move: Move) -> GameState:
    """
    Commit a move
    -----

    1. update the board (castling moves the rook too, en passant removes the pawn behind the destination, promotion to queen)
    2. revoke castling rights if needed
    3. set or clear the en passant square
    4. move counters
    5. captured pieces ledger
    6. move history (notation)
    7. hand the turn to the opponent
    """
    accepted_move = AcceptedMove.from_move_and_state(move, state)
    player_color = accepted_move.moving_piece.color

    # half move clock: reset on any capture or pawn move
    half_move_clock = (
        0
        if accepted_move.is_capture or accepted_move.is_pawn_move
        else state.half_move_clock + 1
    )
    full_move_number = (
        state.full_move_number + 1
        if player_color == Color.BLACK
        else state.full_move_number
    )

    return GameState(
        board=update_board(state.board, accepted_move),
        side_to_move=player_color.opponent,
        castling_rights=revoke_castling_rights_if_needed(
            state.castling_rights, accepted_move
        ),
        en_passant_square=determine_en_passant_square(accepted_move),
        half_move_clock=half_move_clock,
        full_move_number=full_move_number,
        captured=update_captured(state.captured, accepted_move),
        move_history=state.move_history + (move_notation(accepted_move),),
    )


# --- BOARD UPDATES ---
def update_board(board: Board, accepted_move: AcceptedMove) -> Board:
    """Call for the proper updates of the Board's position. Every step hands back a new Board."""
    move = accepted_move.move

    # castling move must displace two pieces on the board
    if accepted_move.castling_direction is not None:
        squares = CASTLING_RULES[accepted_move.castling_direction]
        board = board.move_piece(squares.rook_from, squares.rook_to)

    # the pawn taken en passant is not standing on the destination square
    if accepted_move.is_en_passant:
        board = board.remove_piece(en_passant_victim_square(move))

    board = board.move_piece(move.from_square, move.to_square)

    # no choice offered: pawns always become a queen
    if accepted_move.is_promotion:
        board = board.place_piece(
            accepted_move.moving_piece.promoted_to(PieceType.QUEEN), move.to_square
        )
    return board


# --- BOOKKEEPING ---
def revoke_castling_rights_if_needed(
    rights: CastlingRights, accepted_move: AcceptedMove
) -> CastlingRights:
    """
    Checks which rights should get revoked
    ----

    1. If you are moving your king (castling included) --> revoke both
    2. If you are moving a rook away from its starting square --> revoke the right in that direction
    3. If you are taking your opponent's rook on its starting square --> revoke the opponent's right in that direction
    """
    move = accepted_move.move
    player_color = accepted_move.moving_piece.color
    opponent_color = player_color.opponent

    if accepted_move.moving_piece.type == PieceType.KING:
        rights = rights.revoke_all(player_color)

    if accepted_move.moving_piece.type == PieceType.ROOK:
        for direction in castling_options(player_color):
            if move.from_square == CASTLING_RULES[direction].rook_from:
                rights = rights.revoke(direction)

    if accepted_move.captured_piece == Piece(PieceType.ROOK, opponent_color):
        for direction in castling_options(opponent_color):
            if move.to_square == CASTLING_RULES[direction].rook_from:
                rights = rights.revoke(direction)

    return rights


def determine_en_passant_square(accepted_move: AcceptedMove) -> Optional[Square]:
    """Only a double pawn push creates an en passant square: the square the pawn skipped over."""
    move = accepted_move.move
    if not is_double_pawn_push(move, accepted_move.moving_piece):
        return None
    return Square(
        file=move.from_square.file,
        rank=(move.from_square.rank + move.to_square.rank) // 2,
    )


def update_captured(
    captured: Mapping[Color, tuple[Piece, ...]], accepted_move: AcceptedMove
) -> dict[Color, tuple[Piece, ...]]:
    """Append the taken piece (if any) to the capturing side's ledger. Always a new dict, the old ledger is left alone."""
    ledger = dict(captured)
    if accepted_move.captured_piece is not None:
        player_color = accepted_move.moving_piece.color
        ledger[player_color] = ledger[player_color] + (accepted_move.captured_piece,)
    return ledger


def move_notation(accepted_move: AcceptedMove) -> str:
    """
    Short notation for the move history
    ----

    * pawn capture: <origin file>x<destination> (ex. exd5), en passant included
    * anything else: <piece letter><x if capturing><destination> (ex. e4, Qxd7, Kf3)

    NOTE: Castling is written down as an ordinary king move (ex. Kg1), and the knight shares the "K" with the king.
    """
    destination = accepted_move.move.to_square.to_algebraic()
    if accepted_move.is_pawn_move and accepted_move.is_capture:
        return f"{accepted_move.move.from_square.file_name}x{destination}"

    capture_mark = "x" if accepted_move.is_capture else ""
    return f"{accepted_move.moving_piece.letter}{capture_mark}{destination}"
