"""Classify a position for the side to move. Recomputed after every move, nothing is cached."""

from typing import Optional

from src.chess.check import is_in_check
from src.chess.generator import has_legal_move
from src.chess.pieces import Color
from src.chess.state import GameState
from src.core.shared_types import Status


def evaluate(state: GameState) -> Status:
    """
    * checkmate: in check, and not a single legal move
    * stalemate: NOT in check, and not a single legal move
    * check: in check, but there is a way out
    * normal: anything else
    """
    in_check = is_in_check(state.board, state.side_to_move)
    can_move = has_legal_move(state)

    if in_check and not can_move:
        return Status.CHECKMATE
    if not can_move:
        return Status.STALEMATE
    if in_check:
        return Status.CHECK
    return Status.NORMAL


def is_checkmate(state: GameState) -> bool:
    return evaluate(state) == Status.CHECKMATE


def is_stalemate(state: GameState) -> bool:
    return evaluate(state) == Status.STALEMATE


def winner(state: GameState, status: Optional[Status] = None) -> Optional[Color]:
    """
    For now only works for checkmate.
    Given we know it is checkmate, the side that is to move just got mated and the opponent must be the winner
    """
    status = status if status is not None else evaluate(state)
    if status != Status.CHECKMATE:
        return None
    return state.side_to_move.opponent
