"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Files and ranks are both indexed 0-7.
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = "abcdefgh"


def is_within_bounds(file: int, rank: int) -> bool:
    """Check raw coordinates BEFORE creating a Square (a Square off the board cannot exist)"""
    return (0 <= file < BOARD_DIMENSIONS[0]) and (0 <= rank < BOARD_DIMENSIONS[1])


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    def __post_init__(self) -> None:
        if not is_within_bounds(self.file, self.rank):
            raise ValueError(
                f"Square off the board: file={self.file}, rank={self.rank}"
            )

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        file = ord(sq[0]) - ord("a")
        rank = int(sq[1]) - 1
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{self.file_name}{self.rank + 1}"

    @property
    def file_name(self) -> str:
        return FILE_NAMES[self.file]

    def offset(self, df: int, dr: int) -> Square | None:
        """The square reached by stepping (df, dr), or None if that falls off the board."""
        file = self.file + df
        rank = self.rank + dr
        if not is_within_bounds(file, rank):
            return None
        return Square(file, rank)


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(file, rank)
    for rank in range(BOARD_DIMENSIONS[1])
    for file in range(BOARD_DIMENSIONS[0])
)
