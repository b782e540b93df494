"""Unit tests for /src/api/models.py"""

import pytest

from src.api.models import GameView, LegalMovesResponse, MoveRequest, MoveView
from src.chess.executor import apply_move
from src.chess.moves import Move
from src.chess.pieces import Color, PieceType
from src.chess.state import GameState
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status


@pytest.mark.parametrize(
    "from_square, to_square",
    [("z9", "e4"), ("e2", "e44"), ("", "e4"), ("e2", "i1")],
)
def test_invalid_move_request(from_square: str, to_square: str) -> None:
    with pytest.raises(InvalidRequestError):
        MoveRequest(from_square=from_square, to_square=to_square)


def test_move_request_to_move() -> None:
    request = MoveRequest(from_square="e2", to_square="e4")
    assert request.to_move() == Move.from_uci("e2e4")


def test_move_view() -> None:
    view = MoveView.from_move(Move.from_uci("g1f3"))
    assert view.from_square == "g1"
    assert view.to_square == "f3"


def test_game_view_of_starting_position() -> None:
    state = GameState.starting_position()
    view = GameView.from_state(state, Status.NORMAL)

    assert len(view.pieces) == 32
    assert view.side_to_move == Color.WHITE
    assert not view.is_check
    assert view.winner is None
    assert view.captured == {Color.WHITE: [], Color.BLACK: []}
    assert view.move_history == []
    assert view.last_move is None
    assert view.fen == state.to_fen()


def test_game_view_after_capture(play) -> None:
    state = play(GameState.starting_position(), "e2e4", "d7d5", "e4d5")
    view = GameView.from_state(state, Status.NORMAL, Move.from_uci("e4d5"))

    assert len(view.pieces) == 31
    assert view.captured[Color.WHITE] == [PieceType.PAWN]
    assert view.move_history == ["e4", "d5", "exd5"]
    assert view.last_move == MoveView(from_square="e4", to_square="d5")


def test_game_view_checkmate() -> None:
    state = apply_move(
        GameState.from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"), Move.from_uci("a1a8")
    )
    view = GameView.from_state(state, Status.CHECKMATE)
    assert view.is_check
    assert view.is_checkmate
    assert not view.is_stalemate
    assert view.winner == Color.WHITE


def test_legal_moves_response() -> None:
    response = LegalMovesResponse(square="g1", legal_moves=["g1f3", "g1h3"])
    assert response.model_dump() == {"square": "g1", "legal_moves": ["g1f3", "g1h3"]}
