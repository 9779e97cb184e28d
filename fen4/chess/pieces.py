"""
Defines the players, the piece catalog, and the pieces themselves.

In a FEN4 record every piece is written as a color prefix followed by a catalog
letter ('rK' is red's king). Extending the catalog (adding an entry to
FEN_TO_PIECE) is all that is needed to support a new kind of piece.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self


class Color(Enum):
    """Canonical turn order (clockwise seating)."""

    RED = auto()
    BLUE = auto()
    YELLOW = auto()
    GREEN = auto()


COLOR_ORDER: tuple[Color, ...] = (Color.RED, Color.BLUE, Color.YELLOW, Color.GREEN)

# Upper case letters denote whose turn it is, lower case letters prefix the pieces.
TURN_TO_COLOR: dict[str, Color] = {
    "R": Color.RED,
    "B": Color.BLUE,
    "Y": Color.YELLOW,
    "G": Color.GREEN,
}
COLOR_TO_TURN: dict[Color, str] = {value: key for key, value in TURN_TO_COLOR.items()}

PREFIX_TO_COLOR: dict[str, Color] = {
    key.lower(): value for key, value in TURN_TO_COLOR.items()
}
COLOR_TO_PREFIX: dict[Color, str] = {
    value: key for key, value in PREFIX_TO_COLOR.items()
}

# pieces of an eliminated player, optionally followed by their old color: 'dK', 'drK'
DEAD_PREFIX = "d"
WALL_LETTER = "X"


class PieceType(Enum):
    # standard chess
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()
    # non-standard pieces used by the four-player variants
    AMAZON = auto()
    CHANCELLOR = auto()
    DAME = auto()  # promoted queen worth a single point
    ELEPHANT = auto()
    FERZ = auto()
    GRASSHOPPER = auto()
    HAWK = auto()
    KNIGHTRIDER = auto()
    JOKER = auto()
    CAMEL = auto()
    MANN = auto()
    ROSE = auto()
    SERGEANT = auto()
    CHAMPION = auto()
    VIZIER = auto()
    WAZIR = auto()
    GIRAFFE = auto()
    ZEBRA = auto()
    FAIRY_ALPHA = auto()
    FAIRY_BETA = auto()
    FAIRY_GAMMA = auto()
    FAIRY_DELTA = auto()
    # an obstacle on a playable square. Has no owner
    WALL = auto()


FEN_TO_PIECE: dict[str, PieceType] = {
    "P": PieceType.PAWN,
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
    "A": PieceType.AMAZON,
    "C": PieceType.CHANCELLOR,
    "D": PieceType.DAME,
    "E": PieceType.ELEPHANT,
    "F": PieceType.FERZ,
    "G": PieceType.GRASSHOPPER,
    "H": PieceType.HAWK,
    "I": PieceType.KNIGHTRIDER,
    "J": PieceType.JOKER,
    "L": PieceType.CAMEL,
    "M": PieceType.MANN,
    "O": PieceType.ROSE,
    "S": PieceType.SERGEANT,
    "T": PieceType.CHAMPION,
    "V": PieceType.VIZIER,
    "W": PieceType.WAZIR,
    "Y": PieceType.GIRAFFE,
    "Z": PieceType.ZEBRA,
    "α": PieceType.FAIRY_ALPHA,
    "β": PieceType.FAIRY_BETA,
    "γ": PieceType.FAIRY_GAMMA,
    "δ": PieceType.FAIRY_DELTA,
    WALL_LETTER: PieceType.WALL,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


def check_catalog(fen_to_piece: dict[str, PieceType]) -> None:
    """
    The catalog must be a bijection: single character letters, no piece type
    listed twice, every piece type listed.
    """
    for letter in fen_to_piece:
        if len(letter) != 1:
            raise ValueError(
                f"Catalog letters must be a single character, got {letter!r}"
            )
        # a shape letter must never be confused with a color prefix or a run length
        if letter.isdigit() or letter in PREFIX_TO_COLOR or letter == DEAD_PREFIX:
            raise ValueError(
                f"Catalog letter {letter!r} clashes with the record syntax"
            )
    if len(set(fen_to_piece.values())) != len(fen_to_piece):
        raise ValueError("Catalog maps two letters to the same piece type")
    missing = set(PieceType) - set(fen_to_piece.values())
    if missing:
        raise ValueError(
            f"Catalog has no letter for: {sorted(kind.name for kind in missing)}"
        )


check_catalog(FEN_TO_PIECE)


def kind_for_letter(letter: str) -> Optional[PieceType]:
    return FEN_TO_PIECE.get(letter)


def letter_for_kind(kind: PieceType) -> str:
    return PIECE_TO_FEN[kind]


@dataclass(frozen=True)
class Piece:
    """
    A piece is its type plus who it belongs to.

    * color is None for walls, and for dead pieces whose former owner is not recorded.
    * dead pieces belong to an eliminated player; they stay on the board but
        cannot move.
    """

    type: PieceType
    color: Optional[Color]
    dead: bool = False

    def __post_init__(self):
        if self.type == PieceType.WALL:
            if self.color is not None or self.dead:
                raise ValueError("A wall has no color and cannot be dead")
        elif self.color is None and not self.dead:
            raise ValueError(f"A live {self.type.name.lower()} needs a color")

    @classmethod
    def wall(cls) -> Self:
        return cls(PieceType.WALL, None)

    def to_fen(self) -> str:
        letter = letter_for_kind(self.type)
        if self.type == PieceType.WALL:
            return letter
        prefix = DEAD_PREFIX if self.dead else ""
        if self.color is not None:
            prefix += COLOR_TO_PREFIX[self.color]
        return f"{prefix}{letter}"
