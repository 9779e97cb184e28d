"""
The Board holds everything a FEN4 record encodes: whose turn it is, the status of
every player, the halfmove clock and the pieces.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Self

from fen4.chess.extras import ExtraOptions, is_count
from fen4.chess.pieces import COLOR_ORDER, Color, Piece, PieceType
from fen4.chess.square import Square
from fen4.core.exceptions import BoardInvariantError

NUM_STATUS_GROUPS = 4
NUM_CHESS960_POSITIONS = 960

STANDARD_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)
# the 10 ways to put two knights on five empty squares, in Scharnagl order
_KNIGHT_PLACEMENTS: tuple[tuple[int, int], ...] = (
    (0, 1),
    (0, 2),
    (0, 3),
    (0, 4),
    (1, 2),
    (1, 3),
    (1, 4),
    (2, 3),
    (2, 4),
    (3, 4),
)


@dataclass(frozen=True)
class PlayerStatus:
    """
    The values one player has in each of the four status groups of a record.

    The library treats them as opaque non-negative integers.
    In chess.com records they are used as:
    * eliminated: 1 once the player is out of the game
    * castle_king_side / castle_queen_side: 1 while castling is still available
    * points: the score of the player
    """

    eliminated: int = 0
    castle_king_side: int = 0
    castle_queen_side: int = 0
    points: int = 0

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (
            self.eliminated,
            self.castle_king_side,
            self.castle_queen_side,
            self.points,
        )


def default_status() -> dict[Color, PlayerStatus]:
    return {color: PlayerStatus() for color in COLOR_ORDER}


@dataclass(frozen=True)
class Board:
    """
    Snapshot of a four-player game. Constructed wholesale (by the parser, or
    directly); there is no API to move pieces.

    Invariants (checked on construction, so every Board can be written as a record):
    * pieces only on playable squares
    * a status for every color, nothing else
    * halfmove clock and status values are non-negative ints

    status and position are read-only views, so the invariants keep holding.
    """

    turn: Color
    status: Mapping[Color, PlayerStatus] = field(default_factory=default_status)
    halfmove_clock: int = 0
    position: Mapping[Square, Piece] = field(default_factory=dict)
    extras: ExtraOptions = field(default_factory=ExtraOptions)

    # status and position are mappings, which are not hashable
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self):
        # own copies: callers can keep using the mappings they passed in
        object.__setattr__(self, "status", MappingProxyType(dict(self.status)))
        object.__setattr__(self, "position", MappingProxyType(dict(self.position)))
        self.validate()

    def validate(self) -> None:
        """Raise BoardInvariantError if the board cannot be written as a record."""
        if not isinstance(self.turn, Color):
            raise BoardInvariantError(f"Turn must be a Color, got {self.turn!r}")

        if set(self.status) != set(COLOR_ORDER):
            raise BoardInvariantError(
                "Need a status for exactly every color, got: "
                f"{sorted(str(c) for c in self.status)}"
            )
        for color, player_status in self.status.items():
            if not isinstance(player_status, PlayerStatus):
                raise BoardInvariantError(
                    f"Status of {color.name} must be a PlayerStatus: {player_status!r}"
                )
            if not all(is_count(value) for value in player_status.as_tuple()):
                raise BoardInvariantError(
                    f"Status values of {color.name} must be non-negative integers: "
                    f"{player_status}"
                )

        if not is_count(self.halfmove_clock):
            raise BoardInvariantError(
                "Halfmove clock must be a non-negative integer: "
                f"{self.halfmove_clock!r}"
            )

        for square, piece in self.position.items():
            if not isinstance(piece, Piece):
                raise BoardInvariantError(f"Not a piece on {square}: {piece!r}")
            if not square.is_playable():
                raise BoardInvariantError(
                    f"Piece {piece.to_fen()!r} on {square}, not a playable square"
                )

    # --- ACCESSORS ---
    def piece(self, square: Square) -> Optional[Piece]:
        """None for an empty square"""
        return self.position.get(square)

    def pieces_of(self, color: Color) -> dict[Square, Piece]:
        """
        Live pieces of a player
        (dead pieces are not counted, even if their former color is known)
        """
        return {
            square: piece
            for square, piece in self.position.items()
            if piece.color == color and not piece.dead
        }

    def status_groups(self) -> tuple[tuple[int, ...], ...]:
        """
        Transpose the per-player status into the four groups as written in a
        record (one value per color per group)
        """
        return tuple(
            tuple(self.status[color].as_tuple()[group] for color in COLOR_ORDER)
            for group in range(NUM_STATUS_GROUPS)
        )

    # --- CONSTRUCTORS ---
    @classmethod
    def empty(cls, turn: Color = Color.RED) -> Self:
        return cls(turn)

    @classmethod
    def starting_position(cls) -> Self:
        """
        The chess.com set-up: red at the bottom, then clockwise blue, yellow and
        green. All castling rights available.
        """
        return cls.from_back_rank(STANDARD_BACK_RANK)

    @classmethod
    def chess960(cls, number: int) -> Self:
        """
        Randomized back ranks. `number` runs from 1 to 960 and is one more than
        the Scharnagl number of the arrangement, so that chess960(519) is the
        standard set-up and chess960(1) is BBQNNRKR.
        """
        if not (1 <= number <= NUM_CHESS960_POSITIONS):
            raise ValueError(
                f"Chess960 number must be within 1-{NUM_CHESS960_POSITIONS}, "
                f"got {number}"
            )
        return cls.from_back_rank(chess960_back_rank(number))

    @classmethod
    def from_back_rank(cls, back_rank: tuple[PieceType, ...]) -> Self:
        """
        Every player gets the same arrangement, rotated to their own edge.
        Reading from the player's left to right: red along rank 1, blue up the
        a-file, yellow along rank 14 (right to left from red's view), green down
        the n-file.
        """
        position: dict[Square, Piece] = {}
        for idx, piece_type in enumerate(back_rank):
            position[Square(3 + idx, 0)] = Piece(piece_type, Color.RED)
            position[Square(0, 3 + idx)] = Piece(piece_type, Color.BLUE)
            position[Square(10 - idx, 13)] = Piece(piece_type, Color.YELLOW)
            position[Square(13, 10 - idx)] = Piece(piece_type, Color.GREEN)

            position[Square(3 + idx, 1)] = Piece(PieceType.PAWN, Color.RED)
            position[Square(1, 3 + idx)] = Piece(PieceType.PAWN, Color.BLUE)
            position[Square(10 - idx, 12)] = Piece(PieceType.PAWN, Color.YELLOW)
            position[Square(12, 10 - idx)] = Piece(PieceType.PAWN, Color.GREEN)

        status = {
            color: PlayerStatus(castle_king_side=1, castle_queen_side=1)
            for color in COLOR_ORDER
        }
        return cls(Color.RED, status, 0, position)


def chess960_back_rank(number: int) -> tuple[PieceType, ...]:
    """
    Decode a (1-based) chess960 number into the 8 pieces of the back rank,
    see Board.chess960
    """
    remainder = number - 1
    rank: list[Optional[PieceType]] = [None] * 8

    remainder, light_bishop = divmod(remainder, 4)
    rank[2 * light_bishop + 1] = PieceType.BISHOP
    remainder, dark_bishop = divmod(remainder, 4)
    rank[2 * dark_bishop] = PieceType.BISHOP

    remainder, queen = divmod(remainder, 6)
    empty = [idx for idx, piece_type in enumerate(rank) if piece_type is None]
    rank[empty[queen]] = PieceType.QUEEN

    empty = [idx for idx, piece_type in enumerate(rank) if piece_type is None]
    for knight in _KNIGHT_PLACEMENTS[remainder]:
        rank[empty[knight]] = PieceType.KNIGHT

    # the king always sits between the two rooks
    empty = [idx for idx, piece_type in enumerate(rank) if piece_type is None]
    for idx, piece_type in zip(empty, (PieceType.ROOK, PieceType.KING, PieceType.ROOK)):
        rank[idx] = piece_type

    return tuple(piece_type for piece_type in rank if piece_type is not None)
