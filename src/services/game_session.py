"""
Orchestration of a single game, for whatever presentation layer sits on top.

The session holds the live GameState plus every earlier state (for undo), and turns the user's clicks
into moves. Timing (like a pause before the automated opponent moves) is up to the caller.
"""

import logging
from typing import Optional

from src.api.models import GameView, LegalMovesResponse
from src.bot.selector import MoveSelector
from src.chess.evaluator import evaluate
from src.chess.executor import apply_move
from src.chess.generator import legal_destinations, legal_moves_from
from src.chess.moves import Move
from src.chess.pieces import Color
from src.chess.square import Square
from src.chess.state import GameState
from src.core.config import SelectorSettings
from src.core.exceptions import IllegalMoveError, NoMoveAvailableError, NotYourTurnError
from src.core.shared_types import GameMode, Status

logger = logging.getLogger(__name__)


class GameSession:
    """One game: human vs automated opponent (BOT), or two humans at the same board (PVP)."""

    def __init__(
        self,
        mode: GameMode = GameMode.BOT,
        human_color: Color = Color.WHITE,
        selector: Optional[MoveSelector] = None,
        settings: Optional[SelectorSettings] = None,
        starting_fen: Optional[str] = None,
    ) -> None:
        self.mode = mode
        self.human_color = human_color
        self.selector = selector or MoveSelector(settings)
        self.reset(starting_fen)

    # -- STATE ---
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def history(self) -> list[GameState]:
        """Earlier states, oldest first (a copy: the session's own list cannot be edited from outside)"""
        return list(self._history)

    @property
    def status(self) -> Status:
        return self._status

    @property
    def winner(self) -> Optional[Color]:
        if self._status != Status.CHECKMATE:
            return None
        return self._state.side_to_move.opponent

    @property
    def is_over(self) -> bool:
        return self._status.is_terminal

    @property
    def last_move(self) -> Optional[Move]:
        return self._last_moves[-1] if self._last_moves else None

    @property
    def selected_square(self) -> Optional[Square]:
        return self._selected_square

    @property
    def legal_targets(self) -> list[Square]:
        """Legal destinations of the selected piece (empty if nothing is selected)"""
        return list(self._legal_targets)

    @property
    def is_bot_turn(self) -> bool:
        return (
            self.mode == GameMode.BOT
            and self._state.side_to_move != self.human_color
            and not self.is_over
        )

    # -- REQUESTS FROM THE PRESENTATION LAYER ---
    def legal_destinations(self, square: Square) -> list[Square]:
        return legal_destinations(self._state, square)

    def legal_moves_response(self, square: Square) -> LegalMovesResponse:
        return LegalMovesResponse(
            square=square.to_algebraic(),
            legal_moves=[
                move.to_uci() for move in legal_moves_from(self._state, square)
            ],
        )

    def select_square(self, square: Square) -> Optional[Move]:
        """
        A click on the board
        ----

        1. A piece is selected and the square is one of its legal destinations --> make the move
        2. The square holds a piece you may move --> select it (replaces the previous selection)
        3. Anything else --> clear the selection

        Returns the move, if one was made.
        """
        if self._selected_square is not None and square in self._legal_targets:
            move = Move(self._selected_square, square)
            self.make_move(move.from_square, move.to_square)
            return move

        if self._can_select(square):
            self._selected_square = square
            self._legal_targets = legal_destinations(self._state, square)
        else:
            self._clear_selection()
        return None

    def make_move(self, from_square: Square, to_square: Square, strict: bool = False) -> bool:
        """
        Attempt to make a move
        -----

        An illegal move is ignored (returns False), or raises IllegalMoveError when `strict`.
        """
        if self.is_over or to_square not in legal_destinations(self._state, from_square):
            if strict:
                raise IllegalMoveError(
                    f"Move not allowed: {from_square.to_algebraic()}{to_square.to_algebraic()}"
                )
            logger.debug(
                "Ignoring move request %s -> %s",
                from_square.to_algebraic(),
                to_square.to_algebraic(),
            )
            return False

        self._commit(Move(from_square, to_square))
        return True

    def play_bot_move(self) -> Move:
        """
        Let the automated opponent make its move.

        Only in a BOT game, on the opponent's turn: NotYourTurnError otherwise.
        A checkmate or stalemate leaves nothing to play: NoMoveAvailableError.
        """
        if self.mode != GameMode.BOT or self._state.side_to_move == self.human_color:
            raise NotYourTurnError(
                f"Not the automated opponent's turn. mode: {self.mode}, {self._state.side_to_move} to move"
            )
        move = self.selector.select_move(self._state)
        if move is None:
            raise NoMoveAvailableError(
                f"No legal move for {self._state.side_to_move}. status: {self._status}"
            )
        self._commit(move)
        return move

    def undo(self) -> bool:
        """Go back to the state before the last move. False if there is nothing to undo."""
        if not self._history:
            return False
        self._state = self._history.pop()
        self._last_moves.pop()
        self._status = evaluate(self._state)
        self._clear_selection()
        logger.info("Move undone, %s to move", self._state.side_to_move)
        return True

    def reset(self, starting_fen: Optional[str] = None) -> None:
        """Replace the whole game with a fresh one."""
        self._state = (
            GameState.from_fen(starting_fen)
            if starting_fen
            else GameState.starting_position()
        )
        self._history: list[GameState] = []
        self._last_moves: list[Move] = []
        self._status = evaluate(self._state)
        self._clear_selection()
        logger.info("New game (%s), %s to move", self.mode, self._state.side_to_move)

    def view(self) -> GameView:
        return GameView.from_state(self._state, self._status, self.last_move)

    # -- PRIVATE HELPERS ---
    def _commit(self, move: Move) -> None:
        """Apply the move, keep the previous state, and re-evaluate the position."""
        self._history.append(self._state)
        self._state = apply_move(self._state, move)
        self._last_moves.append(move)
        self._status = evaluate(self._state)
        self._clear_selection()
        logger.info(
            "%s played %s, status: %s",
            self._state.side_to_move.opponent,
            self._state.move_history[-1],
            self._status,
        )

    def _can_select(self, square: Square) -> bool:
        """Only pieces of the side to move. Against the automated opponent: only your own pieces."""
        piece = self._state.board.piece(square)
        if piece is None or piece.color != self._state.side_to_move or self.is_over:
            return False
        if self.mode == GameMode.BOT:
            return piece.color == self.human_color
        return True

    def _clear_selection(self) -> None:
        self._selected_square: Optional[Square] = None
        self._legal_targets: list[Square] = []
