"""
The optional 'extra options' field of a FEN4 record.

chess.com appends a python-dict-like field after the halfmove counter when a
position needs more state than the fixed fields can hold, ex.
    {'lives':(50,50,50,50),'enPassant':('i3:i4','c6:d6','f12:f11','l9:k9')}

* enPassant: per player the square a pawn skipped and the square it landed on
    ('' if none)
* royal (or kingSquares): per player the square of the royal piece ('' if none)
* lives: per player number of lives left (variants with multiple lives)
* resigned / flagged: per player whether they resigned or ran out of time
* pawnBaseRank / uniquify: variant bookkeeping numbers
"""

from dataclasses import dataclass, fields
from typing import Optional

from fen4.chess.square import Square
from fen4.core.exceptions import (
    BoardInvariantError,
    InvalidExtraError,
    InvalidSquareError,
)

NUM_PLAYERS = 4
# order in which the labels are written
LABEL_ORDER: tuple[str, ...] = (
    "resigned",
    "flagged",
    "lives",
    "enPassant",
    "royal",
    "pawnBaseRank",
    "uniquify",
)
LABEL_ALIASES: dict[str, str] = {"kingSquares": "royal"}

EnPassant = Optional[tuple[Square, Square]]


def is_count(value: object) -> bool:
    """A non-negative int. bool is an int subclass but is written as 'True'."""
    return type(value) is int and value >= 0


@dataclass(frozen=True)
class ExtraOptions:
    en_passant: tuple[EnPassant, ...] = (None,) * NUM_PLAYERS
    royal: tuple[Optional[Square], ...] = (None,) * NUM_PLAYERS
    lives: Optional[tuple[int, ...]] = None
    resigned: tuple[bool, ...] = (False,) * NUM_PLAYERS
    flagged: tuple[bool, ...] = (False,) * NUM_PLAYERS
    pawn_base_rank: int = 0
    uniquify: int = 0

    def __post_init__(self):
        for name in ("en_passant", "royal", "resigned", "flagged"):
            if len(getattr(self, name)) != NUM_PLAYERS:
                raise BoardInvariantError(
                    f"Extra option {name} needs exactly {NUM_PLAYERS} entries"
                )
        if self.lives is not None and (
            len(self.lives) != NUM_PLAYERS
            or not all(is_count(life) for life in self.lives)
        ):
            raise BoardInvariantError("Lives need exactly 4 non-negative integers")
        if not (is_count(self.pawn_base_rank) and is_count(self.uniquify)):
            raise BoardInvariantError(
                "pawnBaseRank and uniquify must be non-negative integers"
            )

        squares = [square for square in self.royal if square is not None]
        for pair in self.en_passant:
            if pair is not None:
                squares.extend(pair)
        for square in squares:
            if not square.is_within_bounds():
                raise BoardInvariantError(
                    f"Extra options refer to {square}, which is not on the board"
                )

    def is_empty(self) -> bool:
        """Nothing to write: every option has its default value"""
        return all(getattr(self, f.name) == f.default for f in fields(self))

    def to_fen(self) -> str:
        entries: list[str] = []
        for label in LABEL_ORDER:
            value = self._value_to_fen(label)
            if value is not None:
                entries.append(f"'{label}':{value}")
        return "{" + ",".join(entries) + "}"

    def _value_to_fen(self, label: str) -> Optional[str]:
        """Encoded value of a single option, None if it has its default value"""
        if label in ("resigned", "flagged"):
            flags: tuple[bool, ...] = getattr(self, label)
            if not any(flags):
                return None
            return _array("true" if flag else "false" for flag in flags)
        if label == "lives":
            if self.lives is None:
                return None
            return _array(str(life) for life in self.lives)
        if label == "enPassant":
            if not any(self.en_passant):
                return None
            return _array(
                "''" if pair is None else f"'{_square_names(pair)}'"
                for pair in self.en_passant
            )
        if label == "royal":
            if not any(self.royal):
                return None
            return _array(
                "''" if square is None else f"'{square.to_algebraic()}'"
                for square in self.royal
            )
        if label == "pawnBaseRank":
            return str(self.pawn_base_rank) if self.pawn_base_rank else None
        if label == "uniquify":
            return str(self.uniquify) if self.uniquify else None
        raise KeyError(label)


def _array(items) -> str:
    return "(" + ",".join(items) + ")"


def _square_names(pair: tuple[Square, Square]) -> str:
    return f"{pair[0].to_algebraic()}:{pair[1].to_algebraic()}"


def split_top_level(text: str, separator: str) -> list[str]:
    """Split on the separator, but not inside quotes or parentheses."""
    parts: list[str] = []
    depth = 0
    in_quotes = False
    start = 0
    for idx, character in enumerate(text):
        if character == "'":
            in_quotes = not in_quotes
        elif in_quotes:
            continue
        elif character == "(":
            depth += 1
        elif character == ")":
            depth -= 1
        elif character == separator and depth == 0:
            parts.append(text[start:idx])
            start = idx + 1
    parts.append(text[start:])
    return parts


def parse_extras(token: str, offset: Optional[int] = None) -> ExtraOptions:
    """Parse the '{...}' field. Any malformation raises InvalidExtraError"""

    def fail(reason: str) -> InvalidExtraError:
        return InvalidExtraError(token, reason, offset=offset)

    text = token.strip()
    if not (text.startswith("{") and text.endswith("}")):
        raise fail("must be enclosed in '{' and '}'")
    body = text[1:-1]
    if not body:
        raise fail("must contain at least one option")

    options: dict[str, object] = {}
    for entry in split_top_level(body, ","):
        label_part, colon, value = entry.partition(":")
        if not colon:
            raise fail(f"entry {entry!r} has no ':'")
        if not _is_quoted(label_part):
            raise fail(f"label {label_part!r} is not quoted")
        label = LABEL_ALIASES.get(label_part[1:-1], label_part[1:-1])
        if label not in LABEL_ORDER:
            raise fail(f"unknown option {label_part[1:-1]!r}")
        if label in options:
            raise fail(f"option {label!r} given twice")
        try:
            options[label] = _parse_value(label, value)
        except (ValueError, InvalidSquareError) as e:
            raise fail(f"bad value for {label!r}: {e}") from e

    return ExtraOptions(
        en_passant=options.get("enPassant", (None,) * NUM_PLAYERS),
        royal=options.get("royal", (None,) * NUM_PLAYERS),
        lives=options.get("lives"),
        resigned=options.get("resigned", (False,) * NUM_PLAYERS),
        flagged=options.get("flagged", (False,) * NUM_PLAYERS),
        pawn_base_rank=options.get("pawnBaseRank", 0),
        uniquify=options.get("uniquify", 0),
    )


def _parse_value(label: str, value: str) -> object:
    if label in ("pawnBaseRank", "uniquify"):
        return _parse_count(value)
    if label == "lives":
        return tuple(_parse_count(item) for item in _split_array(value))
    if label in ("resigned", "flagged"):
        return tuple(_parse_flag(item) for item in _split_array(value))
    if label == "royal":
        return tuple(
            Square.from_algebraic(name) if name else None
            for name in (_unquote(item) for item in _split_array(value))
        )
    if label == "enPassant":
        return tuple(
            _parse_en_passant(_unquote(item)) for item in _split_array(value)
        )
    raise KeyError(label)


def _split_array(value: str) -> list[str]:
    if not (value.startswith("(") and value.endswith(")")):
        raise ValueError(f"{value!r} is not a '(...)' array")
    items = split_top_level(value[1:-1], ",")
    if len(items) != NUM_PLAYERS:
        raise ValueError(f"{value!r} does not hold exactly {NUM_PLAYERS} entries")
    return items


def _is_quoted(item: str) -> bool:
    return len(item) >= 2 and item.startswith("'") and item.endswith("'")


def _unquote(item: str) -> str:
    if not _is_quoted(item):
        raise ValueError(f"{item!r} is not quoted")
    return item[1:-1]


def _parse_count(item: str) -> int:
    if not (item.isascii() and item.isdigit()):
        raise ValueError(f"{item!r} is not a non-negative integer")
    try:
        # leading zeros do not count towards the digit limit of int()
        return int(item.lstrip("0") or "0")
    except ValueError:
        raise ValueError(f"{len(item)} digits are too many for a number") from None


def _parse_flag(item: str) -> bool:
    if item == "true":
        return True
    if item == "false":
        return False
    raise ValueError(f"{item!r} is neither 'true' nor 'false'")


def _parse_en_passant(item: str) -> EnPassant:
    if not item:
        return None
    skipped, colon, landed = item.partition(":")
    if not colon or ":" in landed:
        raise ValueError(f"{item!r} is not of the form 'square:square'")
    return (Square.from_algebraic(skipped), Square.from_algebraic(landed))
