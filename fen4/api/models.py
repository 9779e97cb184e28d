"""
Boundary models.

JSON friendly views of a Board, for tools that want to exchange positions as
structured data rather than as a FEN4 record. Squares are named algebraically
('a1' - 'n14') and pieces use the same tokens as the record ('rK', 'dQ', 'X').
"""

from typing import Optional, Self

from pydantic import BaseModel, NonNegativeInt, field_validator

from fen4.chess.board import Board, PlayerStatus
from fen4.chess.extras import parse_extras
from fen4.chess.fen import (
    FIELD_SEPARATOR,
    NUM_FIELDS,
    NUM_FIELDS_WITH_EXTRAS,
    format_board,
    parse_piece,
)
from fen4.chess.pieces import COLOR_ORDER, COLOR_TO_TURN, TURN_TO_COLOR, Color
from fen4.chess.square import BOARD_DIMENSIONS, Square
from fen4.core.exceptions import (
    BoardInvariantError,
    BoardParseError,
    InvalidRequestError,
    InvalidSquareError,
)

ColorName = str
SquareName = str
PieceToken = str


def color_name(color: Color) -> ColorName:
    return color.name.lower()


COLOR_NAMES: dict[ColorName, Color] = {
    color_name(color): color for color in COLOR_ORDER
}


# --- REQUEST MODELS ---
class RecordRequest(BaseModel):
    record: str

    @field_validator("record")
    @classmethod
    def validate_record(cls, value: str) -> str:
        """Only a structural check, full validation happens when the record is parsed"""
        num_fields = len(value.split(FIELD_SEPARATOR))
        if num_fields not in (NUM_FIELDS, NUM_FIELDS_WITH_EXTRAS):
            raise InvalidRequestError(
                f"FEN4 record must contain {NUM_FIELDS} "
                f"(or {NUM_FIELDS_WITH_EXTRAS} with extra options) "
                f"'{FIELD_SEPARATOR}' separated fields, found {num_fields}."
            )
        return value


# --- SNAPSHOT MODELS ---
class PlayerStatusModel(BaseModel):
    eliminated: NonNegativeInt = 0
    castle_king_side: NonNegativeInt = 0
    castle_queen_side: NonNegativeInt = 0
    points: NonNegativeInt = 0


class BoardSnapshot(BaseModel):
    turn: str
    status: dict[ColorName, PlayerStatusModel]
    halfmove_clock: NonNegativeInt
    pieces: dict[SquareName, PieceToken]
    extras: Optional[str] = None

    @field_validator("turn")
    @classmethod
    def validate_turn(cls, value: str) -> str:
        if value not in TURN_TO_COLOR:
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as the color to move."
            )
        return value

    @field_validator("status")
    @classmethod
    def validate_status(
        cls, value: dict[ColorName, PlayerStatusModel]
    ) -> dict[ColorName, PlayerStatusModel]:
        if set(value) != set(COLOR_NAMES):
            raise InvalidRequestError(
                f"Status must be given for exactly {sorted(COLOR_NAMES)}, "
                f"got {sorted(value)}."
            )
        return value

    @field_validator("pieces")
    @classmethod
    def validate_squares(
        cls, value: dict[SquareName, PieceToken]
    ) -> dict[SquareName, PieceToken]:
        for square_name in value:
            try:
                Square.from_algebraic(square_name)
            except InvalidSquareError as e:
                raise InvalidRequestError(
                    f"Cannot interpret {square_name!r} as a square name."
                ) from e
        return value

    @classmethod
    def from_board(cls, board: Board) -> Self:
        return cls(
            turn=COLOR_TO_TURN[board.turn],
            status={
                color_name(color): PlayerStatusModel(**vars(player_status))
                for color, player_status in board.status.items()
            },
            halfmove_clock=board.halfmove_clock,
            pieces={
                square.to_algebraic(): piece.to_fen()
                for square, piece in board.position.items()
            },
            extras=None if board.extras.is_empty() else board.extras.to_fen(),
        )

    def to_board(self) -> Board:
        """
        Raise InvalidRequestError if the snapshot does not describe a board that
        can be written as a record.
        """
        num_ranks = BOARD_DIMENSIONS[1]
        try:
            position = {}
            for square_name, token in self.pieces.items():
                square = Square.from_algebraic(square_name)
                rank_index = num_ranks - 1 - square.rank
                position[square] = parse_piece(token, rank_index, square.file)
            status = {
                COLOR_NAMES[name]: PlayerStatus(**model.model_dump())
                for name, model in self.status.items()
            }
            extras = {}
            if self.extras is not None:
                extras["extras"] = parse_extras(self.extras)
            return Board(
                TURN_TO_COLOR[self.turn],
                status,
                self.halfmove_clock,
                position,
                **extras,
            )
        except (BoardParseError, BoardInvariantError) as e:
            raise InvalidRequestError(
                f"Snapshot does not describe a valid board: {e}"
            ) from e

    def to_record(self) -> str:
        return format_board(self.to_board())
