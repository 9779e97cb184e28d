"""
A square on the board, and the geometry of the cross shaped four-player board.

(placed in its own module as multiple other modules need to import it)

The board is a 14x14 grid with a 3x3 block cut out of every corner, leaving 160
playable squares. Files and ranks are 0-based here: file 0 is the a-file, rank 0
is the 1st rank (red's back rank).
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase
from typing import Iterator

from fen4.core.exceptions import InvalidSquareError

BOARD_DIMENSIONS = (14, 14)
# size of the block removed from each corner
CORNER_SIZE = 3
NUM_PLAYABLE_SQUARES = 160


def is_playable(file: int, rank: int) -> bool:
    """A cell is playable if it is on the grid and not inside a corner cutout."""
    num_files, num_ranks = BOARD_DIMENSIONS
    if not (0 <= file < num_files and 0 <= rank < num_ranks):
        return False
    in_corner_files = file < CORNER_SIZE or file >= num_files - CORNER_SIZE
    in_corner_ranks = rank < CORNER_SIZE or rank >= num_ranks - CORNER_SIZE
    return not (in_corner_files and in_corner_ranks)


class _PlayableSquares:
    """
    Lazy and restartable: every call to iter() walks the board again
    (rank by rank, a-file first).
    """

    def __iter__(self) -> Iterator[Square]:
        num_files, num_ranks = BOARD_DIMENSIONS
        for rank in range(num_ranks):
            for file in range(num_files):
                if is_playable(file, rank):
                    yield Square(file, rank)

    def __len__(self) -> int:
        return NUM_PLAYABLE_SQUARES


def all_playable_squares() -> _PlayableSquares:
    return _PlayableSquares()


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'n14' get converted to (0, 0) - (13, 13)"""
        num_files, num_ranks = BOARD_DIMENSIONS
        file_char, rank_chars = sq[:1], sq[1:]
        if not file_char or file_char not in ascii_lowercase[:num_files]:
            raise InvalidSquareError(
                f"{sq!r} does not start with a valid file. Valid files are 'a'-'n'."
            )
        is_number = (
            rank_chars.isascii() and rank_chars.isdigit() and len(rank_chars) <= 2
        )
        if not is_number or not (1 <= int(rank_chars) <= num_ranks):
            raise InvalidSquareError(
                f"{sq!r} does not end in a valid rank. Valid ranks are 1-14."
            )
        return cls(ascii_lowercase.index(file_char), int(rank_chars) - 1)

    def to_algebraic(self) -> str:
        return f"{ascii_lowercase[self.file]}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    def is_playable(self) -> bool:
        return is_playable(self.file, self.rank)
