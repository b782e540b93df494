"""Requests and read-only views exchanged with a presentation layer"""

from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, field_validator

from src.chess.fen import is_valid_square
from src.chess.moves import Move
from src.chess.pieces import Color, PieceType
from src.chess.state import GameState
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if len(value) != 2 or not is_valid_square(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value

    def to_move(self) -> Move:
        return Move.from_uci(f"{self.from_square}{self.to_square}")


# --- RESPONSE MODELS ---
class PieceView(BaseModel):
    model_config = ConfigDict(frozen=True)

    square: str
    type: PieceType
    color: Color


class MoveView(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_square: str
    to_square: str

    @classmethod
    def from_move(cls, move: Move) -> Self:
        return cls(
            from_square=move.from_square.to_algebraic(),
            to_square=move.to_square.to_algebraic(),
        )


class GameView(BaseModel):
    """Read-only projection of a GameState: everything needed to draw the board, the status line and the history."""

    model_config = ConfigDict(frozen=True)

    pieces: list[PieceView]
    side_to_move: Color
    status: Status
    is_check: bool
    is_checkmate: bool
    is_stalemate: bool
    winner: Optional[Color]
    captured: dict[Color, list[PieceType]]
    move_history: list[str]
    last_move: Optional[MoveView]
    fen: str

    @classmethod
    def from_state(
        cls, state: GameState, status: Status, last_move: Optional[Move] = None
    ) -> Self:
        pieces = [
            PieceView(square=square.to_algebraic(), type=piece.type, color=piece.color)
            for square, piece in state.board.position.items()
            if piece is not None
        ]
        return cls(
            pieces=pieces,
            side_to_move=state.side_to_move,
            status=status,
            is_check=status in (Status.CHECK, Status.CHECKMATE),
            is_checkmate=status == Status.CHECKMATE,
            is_stalemate=status == Status.STALEMATE,
            winner=state.side_to_move.opponent if status == Status.CHECKMATE else None,
            captured={
                color: [piece.type for piece in taken]
                for color, taken in state.captured.items()
            },
            move_history=list(state.move_history),
            last_move=MoveView.from_move(last_move) if last_move else None,
            fen=state.to_fen(),
        )


class LegalMovesResponse(BaseModel):
    square: str
    legal_moves: list[str]
