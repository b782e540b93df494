"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    """Classification of a position for the side to move."""

    NORMAL = "normal"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"

    @property
    def is_terminal(self) -> bool:
        return self in (Status.CHECKMATE, Status.STALEMATE)


class GameMode(StrEnum):
    """Against the automated opponent, or two humans sharing the board."""

    BOT = "bot"
    PVP = "pvp"
