"""
Tunable settings of the automated opponent.

The numbers are heuristics, not rules of the game: change them freely, validation only guards against nonsense.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Scores are in centipawns: a pawn is worth 100
CENTIPAWNS_PER_POINT = 100
DEFAULT_TOP_K = 3
DEFAULT_CHECK_BONUS = 50
DEFAULT_CASTLE_BONUS = 60
DEFAULT_CENTER_BONUS = 20
DEFAULT_HANGING_DIVISOR = 2
DEFAULT_KING_DANGER_THRESHOLD = 1
DEFAULT_KING_DANGER_PENALTY = 20
# larger than all material on the board combined
DEFAULT_CHECKMATE_BONUS = 1000 * CENTIPAWNS_PER_POINT


class SelectorSettings(BaseModel):
    """
    How the automated opponent scores and picks moves.
    ---

    * top_k: pick at random among the `top_k` best scored moves ...
    * score_margin: ... unless a margin is given: then pick among all moves scoring within the margin of the best move.
    * check_bonus / castle_bonus / center_bonus: added when a move gives check / castles / lands on d4, e4, d5 or e5.
    * checkmate_bonus: added on top of the check bonus when the check leaves the opponent without a legal move.
    * hanging_divisor: a piece that can be taken on its new square costs (its value / hanging_divisor).
    * king_danger_threshold / king_danger_penalty: when MORE than `threshold` enemy pieces can reach the squares around your king
        after the move, subtract the penalty. A penalty of 0 switches this check off.
    """

    model_config = ConfigDict(frozen=True)

    top_k: int = Field(default=DEFAULT_TOP_K, ge=1)
    score_margin: Optional[float] = Field(default=None, ge=0)
    check_bonus: int = DEFAULT_CHECK_BONUS
    checkmate_bonus: int = Field(default=DEFAULT_CHECKMATE_BONUS, ge=0)
    castle_bonus: int = DEFAULT_CASTLE_BONUS
    center_bonus: int = DEFAULT_CENTER_BONUS
    hanging_divisor: int = Field(default=DEFAULT_HANGING_DIVISOR, ge=1)
    king_danger_threshold: int = Field(default=DEFAULT_KING_DANGER_THRESHOLD, ge=0)
    king_danger_penalty: int = Field(default=DEFAULT_KING_DANGER_PENALTY, ge=0)

    @model_validator(mode="after")
    def check_bonus_order(self) -> "SelectorSettings":
        """Castling is meant to outweigh a plain check."""
        if self.castle_bonus < self.check_bonus:
            raise ValueError(
                f"castle_bonus ({self.castle_bonus}) should not be smaller than check_bonus ({self.check_bonus})"
            )
        return self
