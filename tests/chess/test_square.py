"""Unit tests for fen4/chess/square.py"""

from string import ascii_lowercase

import pytest

from fen4.chess.square import (
    BOARD_DIMENSIONS,
    NUM_PLAYABLE_SQUARES,
    Square,
    all_playable_squares,
    is_playable,
)
from fen4.core.exceptions import InvalidSquareError


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(14)
        for rank in range(14)
    ],
)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """'a1' maps to file 0, rank 0 and 'n14' to file 13, rank 13"""
    square = Square.from_algebraic(notation)
    assert square.file == file
    assert square.rank == rank
    assert square.to_algebraic() == notation


@pytest.mark.parametrize(
    "notation", ["a0", "a15", "o1", "1a", "", "a", "-", "a#", "A1", "b-1"]
)
def test_invalid_algebraic(notation: str) -> None:
    with pytest.raises(InvalidSquareError):
        Square.from_algebraic(notation)


def test_square_within_bounds() -> None:
    for file in range(BOARD_DIMENSIONS[0]):
        for rank in range(BOARD_DIMENSIONS[1]):
            assert Square(file, rank).is_within_bounds()

    assert not Square(BOARD_DIMENSIONS[0], 0).is_within_bounds()
    assert not Square(-1, -1).is_within_bounds()


@pytest.mark.parametrize(
    "file, rank",
    [
        (0, 0),
        (2, 2),
        (0, 13),
        (2, 11),
        (13, 0),
        (11, 2),
        (13, 13),
        (11, 11),
    ],
)
def test_corner_squares_are_not_playable(file: int, rank: int) -> None:
    assert not is_playable(file, rank)
    assert not Square(file, rank).is_playable()


@pytest.mark.parametrize(
    "file, rank",
    [
        (3, 0),  # red's back rank starts on the d-file
        (10, 0),
        (0, 3),  # blue's back rank starts on the 4th rank
        (13, 10),
        (3, 13),
        (6, 6),  # center
        (2, 3),
        (11, 10),
    ],
)
def test_playable_squares(file: int, rank: int) -> None:
    assert is_playable(file, rank)


@pytest.mark.parametrize("file, rank", [(-1, 5), (5, -1), (14, 5), (5, 14)])
def test_off_the_grid_is_not_playable(file: int, rank: int) -> None:
    assert not is_playable(file, rank)


def test_number_of_playable_squares() -> None:
    squares = list(all_playable_squares())
    assert len(squares) == NUM_PLAYABLE_SQUARES == 160
    assert len(set(squares)) == 160
    assert all(square.is_playable() for square in squares)


def test_playable_squares_restartable() -> None:
    """
    The same iterable can be walked twice
    and gives the same squares in the same order
    """
    squares = all_playable_squares()
    assert list(squares) == list(squares)
    assert next(iter(squares)) == Square(3, 0)
