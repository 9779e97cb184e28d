"""Unit tests for fen4/chess/board.py"""

import pytest

from fen4.chess.board import (
    STANDARD_BACK_RANK,
    Board,
    PlayerStatus,
    chess960_back_rank,
    default_status,
)
from fen4.chess.pieces import COLOR_ORDER, Color, Piece, PieceType
from fen4.chess.square import Square
from fen4.core.exceptions import BoardInvariantError

P = PieceType


def test_empty_board() -> None:
    board = Board.empty()
    assert board.turn == Color.RED
    assert board.halfmove_clock == 0
    assert board.position == {}
    assert board.status == {color: PlayerStatus() for color in COLOR_ORDER}
    assert board.extras.is_empty()


def test_piece_accessor() -> None:
    king = Piece(P.KING, Color.BLUE)
    board = Board(Color.BLUE, position={Square(0, 6): king})
    assert board.piece(Square(0, 6)) == king
    assert board.piece(Square(6, 6)) is None


def test_board_owns_its_mappings() -> None:
    """Changing the dictionary that was passed in does not change the board"""
    position = {Square(6, 6): Piece(P.ROOK, Color.RED)}
    board = Board(Color.RED, position=position)
    position[Square(6, 7)] = Piece(P.ROOK, Color.RED)
    assert len(board.position) == 1


def test_board_is_frozen() -> None:
    board = Board.empty()
    with pytest.raises(AttributeError):
        board.turn = Color.BLUE  # type: ignore[misc]


def test_piece_on_corner_is_rejected() -> None:
    with pytest.raises(BoardInvariantError):
        Board(Color.RED, position={Square(0, 0): Piece(P.KING, Color.RED)})


def test_missing_status_is_rejected() -> None:
    status = default_status()
    del status[Color.GREEN]
    with pytest.raises(BoardInvariantError):
        Board(Color.RED, status=status)


def test_negative_status_is_rejected() -> None:
    status = default_status()
    status[Color.YELLOW] = PlayerStatus(points=-1)
    with pytest.raises(BoardInvariantError):
        Board(Color.RED, status=status)


def test_negative_halfmove_clock_is_rejected() -> None:
    with pytest.raises(BoardInvariantError):
        Board(Color.RED, halfmove_clock=-1)


@pytest.mark.parametrize("halfmove_clock", [True, 1.5, 2.0, "3", None])
def test_halfmove_clock_must_be_an_int(halfmove_clock) -> None:
    """bool and float would be written as 'True' and '2.0'"""
    with pytest.raises(BoardInvariantError):
        Board(Color.RED, halfmove_clock=halfmove_clock)


@pytest.mark.parametrize(
    "player_status",
    [
        PlayerStatus(points=True),
        PlayerStatus(eliminated=False),
        PlayerStatus(castle_king_side=1.0),
        PlayerStatus(castle_queen_side="1"),
    ],
)
def test_status_values_must_be_ints(player_status: PlayerStatus) -> None:
    status = default_status()
    status[Color.BLUE] = player_status
    with pytest.raises(BoardInvariantError):
        Board(Color.RED, status=status)


def test_board_is_not_hashable() -> None:
    with pytest.raises(TypeError):
        hash(Board.empty())


def test_board_mappings_are_read_only() -> None:
    board = Board.starting_position()
    with pytest.raises(TypeError):
        board.position[Square(6, 6)] = Piece(P.QUEEN, Color.RED)  # type: ignore[index]
    with pytest.raises(TypeError):
        board.status[Color.RED] = PlayerStatus(points=1)  # type: ignore[index]
    assert board.piece(Square(6, 6)) is None
    assert board == Board.starting_position()


def test_status_groups_are_transposed() -> None:
    """
    Groups hold one value per color:
    the first group is everybody's 'eliminated' flag, etc.
    """
    status = {
        Color.RED: PlayerStatus(0, 1, 1, 20),
        Color.BLUE: PlayerStatus(1, 0, 0, 5),
        Color.YELLOW: PlayerStatus(0, 1, 0, 0),
        Color.GREEN: PlayerStatus(0, 0, 1, 13),
    }
    board = Board(Color.YELLOW, status=status)
    assert board.status_groups() == (
        (0, 1, 0, 0),
        (1, 0, 1, 0),
        (1, 0, 0, 1),
        (20, 5, 0, 13),
    )


def test_starting_position() -> None:
    board = Board.starting_position()
    assert board.turn == Color.RED
    assert len(board.position) == 64
    for color in COLOR_ORDER:
        assert len(board.pieces_of(color)) == 16
        assert board.status[color] == PlayerStatus(
            castle_king_side=1, castle_queen_side=1
        )

    assert board.piece(Square.from_algebraic("h1")) == Piece(P.KING, Color.RED)
    assert board.piece(Square.from_algebraic("g1")) == Piece(P.QUEEN, Color.RED)
    assert board.piece(Square.from_algebraic("a8")) == Piece(P.KING, Color.BLUE)
    assert board.piece(Square.from_algebraic("g14")) == Piece(P.KING, Color.YELLOW)
    assert board.piece(Square.from_algebraic("n7")) == Piece(P.KING, Color.GREEN)
    assert board.piece(Square.from_algebraic("m4")) == Piece(P.PAWN, Color.GREEN)


def test_pieces_of_ignores_dead_pieces() -> None:
    position = {
        Square(6, 6): Piece(P.QUEEN, Color.RED),
        Square(6, 7): Piece(P.QUEEN, Color.RED, dead=True),
        Square(6, 8): Piece.wall(),
    }
    board = Board(Color.RED, position=position)
    assert board.pieces_of(Color.RED) == {Square(6, 6): Piece(P.QUEEN, Color.RED)}


def test_standard_chess960_number() -> None:
    assert Board.chess960(519) == Board.starting_position()
    assert chess960_back_rank(519) == STANDARD_BACK_RANK


@pytest.mark.parametrize(
    "number, back_rank",
    [
        (1, "BBQNNRKR"),
        (2, "BQNBNRKR"),
        (5, "QBBNNRKR"),
        (519, "RNBQKBNR"),
        (960, "RKRNNQBB"),
    ],
)
def test_chess960_back_rank(number: int, back_rank: str) -> None:
    letters = {P.BISHOP: "B", P.QUEEN: "Q", P.KNIGHT: "N", P.ROOK: "R", P.KING: "K"}
    assert "".join(letters[p] for p in chess960_back_rank(number)) == back_rank


def test_all_chess960_arrangements_are_distinct() -> None:
    arrangements = {chess960_back_rank(number) for number in range(1, 961)}
    assert len(arrangements) == 960
    for arrangement in arrangements:
        assert sorted(arrangement, key=lambda p: p.value) == sorted(
            STANDARD_BACK_RANK, key=lambda p: p.value
        )


@pytest.mark.parametrize("number", [0, 961, -5])
def test_chess960_out_of_range(number: int) -> None:
    with pytest.raises(ValueError):
        Board.chess960(number)
