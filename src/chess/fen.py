"""
FEN, or Forsyth-Edwards Notation: a standard notation for describing a particular board position of a chess game.

<board position string> <active color> <castling rights> <en passant square> <half move clock> <full move number>

* The string to describe the board position is described in the Board class
* The active color is either "w" or "b"
* Castling rights are denoted as "k" for king-side or "q" for queen-side. Capital letters for the white pieces, small letters for the black pieces.
    In the starting position: KQkq (all rights available), and when all rights got revoked a "-" is used.
* The en passant square indicates the square a pawn can take on. If not available a "-" is used.
* The half move clock counts the number of moves made since the last pawn move or capture.
* The full move number starts at 1 and increments after every move black makes.

Here FEN is used to set up positions (and to summarize the current one), the GameState does the actual parsing.
"""

from dataclasses import dataclass
from string import ascii_lowercase

from src.chess.pieces import FEN_TO_PIECE
from src.chess.square import BOARD_DIMENSIONS
from src.core.exceptions import InvalidFENError

# the square a double pawn push skipped over: rank 6 after a black push (white to move), rank 3 after a white push
EN_PASSANT_RANK = {"w": "6", "b": "3"}
CASTLING_CHARACTERS = "KQkq"


@dataclass(frozen=True)
class FENParts:
    """The six space separated fields of a FEN string, still as text."""

    position: str
    active_color: str
    castling: str
    en_passant: str
    half_move_clock: str
    full_move_number: str


def split_fen(fen: str) -> FENParts:
    """Validate and cut the FEN string into its fields. Raise InvalidFENError if it does not follow FEN notation."""
    if not is_valid_fen(fen):
        raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen}")
    return FENParts(*fen.split(" "))


def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows proper FEN notation.
    """

    # there should be 6 parts to the string
    parts = fen.split(" ")
    if len(parts) != 6:
        return False

    position, color, castling, en_passant, half_move_counter, full_move_counter = parts
    if not is_valid_position(position):
        return False

    if not is_valid_color_code(color):
        return False

    if not is_valid_castling_rights(castling):
        return False

    if not is_valid_en_passant(en_passant):
        return False

    if not is_en_passant_on_expected_rank(color, en_passant):
        return False

    return is_valid_move_counter(half_move_counter) and is_valid_move_counter(
        full_move_counter
    )


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_files, num_ranks = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_ranks:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character.isdigit():
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False
    return True


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def is_valid_castling_rights(castling: str) -> bool:
    """A valid castling encoding is a subsequence of KQkq (in that order), or a '-' if all rights have been revoked."""
    if castling == "-":
        return True
    if not castling or len(set(castling)) != len(castling):
        return False
    if any(character not in CASTLING_CHARACTERS for character in castling):
        return False
    positions = [CASTLING_CHARACTERS.index(character) for character in castling]
    return positions == sorted(positions)


def is_valid_en_passant(en_passant: str) -> bool:
    """Valid en passant square encoding should be a square that exists on the board or a '-'"""
    return (en_passant == "-") or is_valid_square(en_passant)


def is_en_passant_on_expected_rank(color: str, en_passant: str) -> bool:
    """Only the pawn that just moved can leave an en passant square behind, so the active color fixes its rank."""
    return (en_passant == "-") or en_passant[1:] == EN_PASSANT_RANK[color]


def is_valid_square(square: str) -> bool:
    """Valid square should be a letter for the file + a number for the rank"""
    num_files, num_ranks = BOARD_DIMENSIONS
    if len(square) < 2:
        return False

    file_char, rank_char = square[0], square[1:]
    allowed_file_names = ascii_lowercase[:num_files]
    if file_char not in allowed_file_names:
        return False

    if not rank_char.isdigit():
        return False

    return 1 <= int(rank_char) <= num_ranks


def is_valid_move_counter(counter: str) -> bool:
    return counter.isdigit()
