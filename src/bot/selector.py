"""
The automated opponent
----

Not a search: every legal move gets a static score, with a single ply of lookahead (the position right after the move).
The best few moves form a shortlist and one of them is picked at random, so the opponent does not play the
exact same game every time. The random source is passed in, which makes the choice reproducible in tests.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional, Protocol, Sequence, TypeVar

from src.bot.tables import CENTER_SQUARES, square_bonus
from src.chess.check import is_in_check, is_square_attacked
from src.chess.executor import AcceptedMove, trial_move
from src.chess.generator import has_legal_move, legal_destinations, legal_moves
from src.chess.moves import Move, pseudo_legal_moves
from src.chess.pieces import Color, Piece
from src.chess.square import Square
from src.chess.state import GameState
from src.core.config import CENTIPAWNS_PER_POINT, SelectorSettings
from src.core.exceptions import NotYourTurnError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """The one method of random.Random the selector needs"""

    def choice(self, seq: Sequence[T]) -> T: ...


@dataclass(frozen=True)
class ScoredMove:
    move: Move
    score: float


def material_value(piece: Piece) -> int:
    """Centipawns. The king is worth nothing here: mating is rewarded through the checkmate bonus instead."""
    return piece.points * CENTIPAWNS_PER_POINT


class MoveSelector:
    """Scores all legal moves and picks one of the best at random."""

    def __init__(
        self,
        settings: Optional[SelectorSettings] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.settings = settings or SelectorSettings()
        self.rng = rng if rng is not None else random.Random()

    def select_move(
        self, state: GameState, side: Optional[Color] = None
    ) -> Optional[Move]:
        """
        The move to play, or None if there is no legal move at all.

        NOTE: The caller is expected to have detected checkmate / stalemate already. None is the answer for a caller that did not.
        """
        candidates = self.top_candidates(state, side)
        if not candidates:
            logger.warning("No move available for %s", state.side_to_move)
            return None

        chosen = self.rng.choice(candidates)
        logger.debug(
            "Picked %s (score %s) out of %d candidates",
            chosen.move.to_uci(),
            chosen.score,
            len(candidates),
        )
        return chosen.move

    def top_candidates(
        self, state: GameState, side: Optional[Color] = None
    ) -> list[ScoredMove]:
        """
        The shortlist to pick from:
        * the `top_k` best moves, or
        * every move within `score_margin` of the best move (if a margin is set)
        """
        if side is not None and side != state.side_to_move:
            raise NotYourTurnError(
                f"Cannot select a move for {side}: it is {state.side_to_move}'s turn."
            )

        scored_moves = self.score_moves(state)
        if not scored_moves:
            return []

        if self.settings.score_margin is not None:
            best_score = scored_moves[0].score
            return [
                scored
                for scored in scored_moves
                if scored.score >= best_score - self.settings.score_margin
            ]
        return scored_moves[: self.settings.top_k]

    def score_moves(self, state: GameState) -> list[ScoredMove]:
        """All legal moves of the side to move, best first."""
        scored_moves = [
            ScoredMove(move, self.score_move(state, move)) for move in legal_moves(state)
        ]
        scored_moves.sort(key=lambda scored: scored.score, reverse=True)
        return scored_moves

    def score_move(self, state: GameState, move: Move) -> float:
        """
        Static score of a single (legal) move
        ----

        + value of the piece taken
        + piece-square table: value of the destination - value of the origin
        + bonus for giving check, and a much larger one if that check is mate
        + bonus for castling
        + bonus for landing in the center
        - half the value of the moved piece, if it can be taken on its new square
        - penalty if too many enemy pieces can reach the squares around your own king
        """
        settings = self.settings
        accepted_move = AcceptedMove.from_move_and_state(move, state)
        piece = accepted_move.moving_piece
        color = piece.color

        score: float = 0
        if accepted_move.captured_piece is not None:
            score += material_value(accepted_move.captured_piece)

        score += square_bonus(piece.type, color, move.to_square) - square_bonus(
            piece.type, color, move.from_square
        )

        # one ply ahead: the position the opponent gets to play in.
        # The en passant square (if any) belonged to this ply and expires.
        after_move = replace(trial_move(state, move), en_passant_square=None)

        if is_in_check(after_move.board, color.opponent):
            score += settings.check_bonus
            if not has_legal_move(after_move):
                score += settings.checkmate_bonus

        if accepted_move.castling_direction is not None:
            score += settings.castle_bonus

        if move.to_square in CENTER_SQUARES:
            score += settings.center_bonus

        if is_hanging(after_move, move.to_square):
            score -= material_value(piece) / settings.hanging_divisor

        if settings.king_danger_penalty and self._is_king_in_danger(after_move, color):
            score -= settings.king_danger_penalty

        return score

    def _is_king_in_danger(self, state: GameState, color: Color) -> bool:
        """Count the enemy pieces that reach the king or any square next to it. More than the threshold is dangerous."""
        return (
            king_zone_attackers(state, color) > self.settings.king_danger_threshold
        )


def is_hanging(state: GameState, square: Square) -> bool:
    """
    Can the side to move legally take the piece on `square`?

    The cheap pseudo-legal check runs first, the legality filter only for positions where some piece reaches the square.
    """
    attacker_color = state.side_to_move
    if not is_square_attacked(state.board, square, attacker_color):
        return False
    return any(
        square in legal_destinations(state, attacker_square)
        for attacker_square in state.board.locate_color(attacker_color)
    )


def king_zone_attackers(state: GameState, color: Color) -> int:
    """Number of enemy pieces with a pseudo-legal move onto the king of `color` or one of its neighbouring squares."""
    king_square = state.board.find_king(color)

    def next_to_king(square: Square) -> bool:
        return (
            abs(square.file - king_square.file) <= 1
            and abs(square.rank - king_square.rank) <= 1
        )

    return sum(
        1
        for attacker_square in state.board.locate_color(color.opponent)
        if any(
            next_to_king(move.to_square)
            for move in pseudo_legal_moves(attacker_square, state.board)
        )
    )
