"""
Reading and writing FEN4 records: the notation chess.com uses to describe a
four-player chess position.

<turn>-<eliminated>-<castle king side>-<castle queen side>-<points>
    -<halfmove clock>[-<extra options>]-<board>

* The turn is one of 'R', 'B', 'Y', 'G'.
* The four status groups hold one non-negative integer per player, comma
    separated, in the order red, blue, yellow, green.
* The halfmove clock counts the moves since the last capture or pawn move.
* The extra options are an optional '{...}' field, see extras.py.
* The board lists the 14 ranks separated by '/', starting with the 14th rank
    (yellow's side). Every rank is a comma separated list of segments.
    A segment is either a number of consecutive empty squares (the removed
    corner squares count as empty), or a piece: a color prefix and a letter
    from the piece catalog ('rK', 'yP').

ex) An empty board, red to move:
R-0,0,0,0-0,0,0,0-0,0,0,0-0,0,0,0-0-14/14/14/14/14/14/14/14/14/14/14/14/14/14
"""

import logging
from typing import Optional

from fen4.chess.board import NUM_STATUS_GROUPS, Board, PlayerStatus
from fen4.chess.extras import ExtraOptions, parse_extras
from fen4.chess.pieces import (
    COLOR_ORDER,
    COLOR_TO_TURN,
    DEAD_PREFIX,
    PREFIX_TO_COLOR,
    TURN_TO_COLOR,
    WALL_LETTER,
    Color,
    Piece,
    PieceType,
    kind_for_letter,
)
from fen4.chess.square import BOARD_DIMENSIONS, Square, is_playable
from fen4.core.exceptions import (
    BoardParseError,
    EmptySegmentError,
    FieldCountError,
    InvalidCounterError,
    InvalidPieceTokenError,
    InvalidRunLengthError,
    InvalidStatusError,
    InvalidTurnError,
    PieceOnRemovedSquareError,
    RankCountError,
    RankLengthError,
    UnknownPieceLetterError,
)

_LOGGER = logging.getLogger(__name__)

FIELD_SEPARATOR = "-"
VALUE_SEPARATOR = ","
RANK_SEPARATOR = "/"
SEGMENT_SEPARATOR = ","
EXTRAS_START = "{"

NUM_FIELDS = 7
NUM_FIELDS_WITH_EXTRAS = 8
EXTRAS_FIELD = 6

EMPTY_FEN4 = "R-0,0,0,0-0,0,0,0-0,0,0,0-0,0,0,0-0-" + "/".join(["14"] * 14)
STARTING_FEN4 = (
    "R-0,0,0,0-1,1,1,1-1,1,1,1-0,0,0,0-0-"
    "3,yR,yN,yB,yK,yQ,yB,yN,yR,3/"
    "3,yP,yP,yP,yP,yP,yP,yP,yP,3/"
    "14/"
    "bR,bP,10,gP,gR/"
    "bN,bP,10,gP,gN/"
    "bB,bP,10,gP,gB/"
    "bK,bP,10,gP,gQ/"
    "bQ,bP,10,gP,gK/"
    "bB,bP,10,gP,gB/"
    "bN,bP,10,gP,gN/"
    "bR,bP,10,gP,gR/"
    "14/"
    "3,rP,rP,rP,rP,rP,rP,rP,rP,3/"
    "3,rR,rN,rB,rQ,rK,rB,rN,rR,3"
)

# (offset into the record, text)
Token = tuple[int, str]


def _split(text: str, separator: str, offset: int = 0) -> list[Token]:
    """str.split, but remember where in the record every part starts"""
    tokens: list[Token] = []
    for part in text.split(separator):
        tokens.append((offset, part))
        offset += len(part) + len(separator)
    return tokens


def _strip(token: Token) -> Token:
    """Surrounding whitespace is allowed (chess.com puts newlines between ranks)"""
    offset, text = token
    return offset + len(text) - len(text.lstrip()), text.strip()


def _to_count(text: str) -> Optional[int]:
    """Value of a non-negative integer in plain ascii digits, None if it is not one"""
    # no signs, no '²' or other unicode digits int() would accept
    if not (text.isascii() and text.isdigit()):
        return None
    try:
        # leading zeros do not count towards the digit limit of int()
        return int(text.lstrip("0") or "0")
    except ValueError:
        # more digits than int() converts
        return None


# --- PARSER ---
def parse(text: str) -> Board:
    """
    Parse a FEN4 record.
    Raises a subclass of BoardParseError pointing at the first problem found.
    """
    try:
        board = _parse_record(text)
    except BoardParseError as e:
        _LOGGER.debug(
            "Rejected FEN4 record (field %d, offset %s): %s", e.field, e.offset, e
        )
        raise
    _LOGGER.debug(
        "Parsed FEN4 record with %d pieces, %s to move",
        len(board.position),
        board.turn.name,
    )
    return board


def is_valid_record(text: str) -> bool:
    """Check if the given string is a well-formed FEN4 record."""
    try:
        _parse_record(text)
    except BoardParseError:
        return False
    return True


def _parse_record(text: str) -> Board:
    fields = _split(text, FIELD_SEPARATOR)

    has_extras = (
        len(fields) == NUM_FIELDS_WITH_EXTRAS
        and fields[EXTRAS_FIELD][1].strip().startswith(EXTRAS_START)
    )
    expected = NUM_FIELDS_WITH_EXTRAS if has_extras else NUM_FIELDS
    if len(fields) != expected:
        raise FieldCountError(expected, len(fields))

    turn = parse_turn(fields[0])
    groups = [
        parse_status_group(group, fields[1 + group])
        for group in range(NUM_STATUS_GROUPS)
    ]
    halfmove_clock = parse_counter(fields[5])

    extras = ExtraOptions()
    if has_extras:
        extras_offset, extras_text = _strip(fields[EXTRAS_FIELD])
        extras = parse_extras(extras_text, offset=extras_offset)

    board_field = len(fields) - 1
    position = parse_position(fields[board_field], field=board_field)

    # a group holds one value per color, the board keeps the values per color
    status = {
        color: PlayerStatus(*(group[color_idx] for group in groups))
        for color_idx, color in enumerate(COLOR_ORDER)
    }
    # Board re-checks all of its invariants on construction
    return Board(turn, status, halfmove_clock, position, extras)


def parse_turn(token: Token) -> Color:
    offset, text = _strip(token)
    if text not in TURN_TO_COLOR:
        raise InvalidTurnError(text, offset=offset)
    return TURN_TO_COLOR[text]


def parse_status_group(group: int, token: Token) -> tuple[int, ...]:
    """A group is exactly one non-negative integer per player: '0,1,1,0'"""
    values: list[int] = []
    for index, value_token in enumerate(_split(token[1], VALUE_SEPARATOR, token[0])):
        offset, text = _strip(value_token)
        value = _to_count(text)
        if index >= len(COLOR_ORDER) or value is None:
            raise InvalidStatusError(group, text, index, offset=offset)
        values.append(value)

    if len(values) != len(COLOR_ORDER):
        # too few values: point at the end of the group, where the next one belongs
        offset, text = token
        raise InvalidStatusError(
            group, text, len(values), offset=offset + len(text)
        )
    return tuple(values)


def parse_counter(token: Token) -> int:
    offset, text = _strip(token)
    value = _to_count(text)
    if value is None:
        raise InvalidCounterError(text, offset=offset)
    return value


def parse_position(
    token: Token, field: int = NUM_FIELDS - 1
) -> dict[Square, Piece]:
    """Parse the board field: 14 ranks from the top (14th rank) down."""
    num_ranks = BOARD_DIMENSIONS[1]
    rank_tokens = _split(token[1], RANK_SEPARATOR, token[0])
    if len(rank_tokens) != num_ranks:
        raise RankCountError(
            num_ranks, len(rank_tokens), field=field, offset=token[0]
        )

    position: dict[Square, Piece] = {}
    for rank_index, rank_token in enumerate(rank_tokens):
        position.update(parse_rank(rank_index, rank_token, field=field))
    return position


def parse_rank(
    rank_index: int, token: Token, field: int = NUM_FIELDS - 1
) -> dict[Square, Piece]:
    """
    Scan a single rank left to right. Every segment either skips a number of
    squares or places one piece, and together they have to cover exactly 14 columns.
    """
    num_files, num_ranks = BOARD_DIMENSIONS
    # the record starts with the top rank
    rank = num_ranks - 1 - rank_index
    pieces: dict[Square, Piece] = {}
    column = 0

    for segment_token in _split(token[1], SEGMENT_SEPARATOR, token[0]):
        offset, segment = _strip(segment_token)
        if not segment:
            raise EmptySegmentError(rank_index, column, field=field, offset=offset)

        if segment[0].isdigit():
            run_length = _to_count(segment)
            if not run_length:
                raise InvalidRunLengthError(
                    segment, rank_index, column, field=field, offset=offset
                )
            column += run_length
            if column > num_files:
                raise RankLengthError(rank_index, column, field=field, offset=offset)
            continue

        if column >= num_files:
            raise RankLengthError(rank_index, column + 1, field=field, offset=offset)
        piece = parse_piece(segment, rank_index, column, field=field, offset=offset)
        if not is_playable(column, rank):
            raise PieceOnRemovedSquareError(
                column, rank, segment, rank_index, field=field, offset=offset
            )
        pieces[Square(column, rank)] = piece
        column += 1

    if column != num_files:
        offset, text = token
        raise RankLengthError(
            rank_index, column, field=field, offset=offset + len(text.rstrip())
        )
    return pieces


def parse_piece(
    segment: str,
    rank_index: int,
    column: int,
    field: int = NUM_FIELDS - 1,
    offset: Optional[int] = None,
) -> Piece:
    """
    'rK' (red king), 'dK' (dead king), 'dgK' (dead king that used to be green)
    or 'X' (a wall)
    """

    def invalid(reason: str) -> InvalidPieceTokenError:
        return InvalidPieceTokenError(
            segment, reason, rank_index, column, field=field, offset=offset
        )

    def unknown(letter: str) -> UnknownPieceLetterError:
        return UnknownPieceLetterError(
            letter, rank_index, column, field=field, offset=offset
        )

    if segment == WALL_LETTER:
        return Piece.wall()

    if len(segment) == 1:
        if kind_for_letter(segment) is None:
            raise unknown(segment)
        raise invalid("missing the color prefix ('r', 'b', 'y', 'g' or 'd')")

    prefix, letter = segment[0], segment[1:]
    dead = prefix == DEAD_PREFIX
    if dead:
        color = None
        if len(letter) > 1 and letter[0] in PREFIX_TO_COLOR:
            color, letter = PREFIX_TO_COLOR[letter[0]], letter[1:]
    elif prefix in PREFIX_TO_COLOR:
        color = PREFIX_TO_COLOR[prefix]
    else:
        raise invalid(
            f"{prefix!r} is not a color prefix. "
            "Valid prefixes are 'r', 'b', 'y', 'g' and 'd'"
        )

    if len(letter) != 1:
        raise invalid(
            "pieces are a color prefix followed by a single piece letter, "
            "like 'rK' or 'drK'"
        )

    piece_type = kind_for_letter(letter)
    if piece_type is None:
        raise unknown(letter)
    if piece_type == PieceType.WALL:
        raise invalid(f"a wall has no owner and is written as a bare {WALL_LETTER!r}")
    return Piece(piece_type, color, dead)


# --- SERIALIZER ---
def format_board(board: Board, multiline: bool = False) -> str:
    """
    Write the canonical FEN4 record of a board: the one and only record `parse`
    turns back into an equal board.

    multiline=True produces the layout chess.com uses (a line break after the
    metadata and after every rank).
    """
    metadata = [COLOR_TO_TURN[board.turn]]
    metadata.extend(
        VALUE_SEPARATOR.join(str(value) for value in group)
        for group in board.status_groups()
    )
    metadata.append(str(board.halfmove_clock))
    if not board.extras.is_empty():
        metadata.append(board.extras.to_fen())

    line_break = "\n" if multiline else ""
    ranks = (RANK_SEPARATOR + line_break).join(
        _rank_to_fen(board, rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
    )
    return FIELD_SEPARATOR.join(metadata) + FIELD_SEPARATOR + line_break + ranks


def _rank_to_fen(board: Board, rank: int) -> str:
    """
    FEN4 string of a single rank.
    Empty squares and removed corner squares are merged into maximal runs.
    """
    segments: list[str] = []
    empty_count = 0
    for file in range(BOARD_DIMENSIONS[0]):
        piece = board.piece(Square(file, rank))

        if piece is not None:
            if empty_count > 0:
                segments.append(str(empty_count))
                empty_count = 0
            segments.append(piece.to_fen())
        else:
            empty_count += 1

    # if the entire rank is empty, then we still place this number in the string
    if empty_count > 0:
        segments.append(str(empty_count))
    return SEGMENT_SEPARATOR.join(segments)
