"""
Exceptions raised across the library.

Every parse failure is a subclass of `BoardParseError` and carries enough context
(field index, character offset, rank/column, offending token) for a caller to
point at the exact spot in the record that could not be read.
"""

from typing import Optional


class Fen4Error(Exception):
    """Root of all errors raised by fen4"""


class InvalidSquareError(Fen4Error, ValueError):
    """A square name such as 'a1' or 'n14' that does not exist on the board"""


class BoardInvariantError(Fen4Error, ValueError):
    """A Board was constructed with data that can never be written as a record"""


class InvalidRequestError(Fen4Error):
    """
    Raised by the boundary models.
    Not a ValueError: pydantic lets it propagate unchanged.
    """


# --- PARSE ERRORS ---
class BoardParseError(Fen4Error, ValueError):
    """
    Base class for every failure of `parse`.

    * field: index of the '-' separated field where the problem was found
        (0 = turn, 6 or 7 = board)
    * offset: character offset into the record of the offending text
        (None if unknown)
    """

    def __init__(self, message: str, field: int, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.offset = offset

    def describe(self, record: str) -> str:
        """
        Human readable diagnostic: the message, followed by the offending line
        with a caret underneath.
        """
        if self.offset is None or not (0 <= self.offset <= len(record)):
            return self.message

        line_start = record.rfind("\n", 0, self.offset) + 1
        line_end = record.find("\n", self.offset)
        if line_end == -1:
            line_end = len(record)
        line = record[line_start:line_end]
        column = self.offset - line_start
        line_number = record.count("\n", 0, self.offset) + 1
        return (
            f"{self.message} (line {line_number}, column {column + 1})\n"
            f"{line}\n"
            f"{' ' * column}^"
        )


class FieldCountError(BoardParseError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Expected {expected} '-' separated fields, found {actual}.",
            field=0,
            offset=0,
        )
        self.expected = expected
        self.actual = actual


class InvalidTurnError(BoardParseError):
    def __init__(self, token: str, offset: Optional[int] = None) -> None:
        super().__init__(
            f"Cannot interpret {token!r} as the color to move. "
            "Valid values are 'R', 'B', 'Y' and 'G'.",
            field=0,
            offset=offset,
        )
        self.token = token


class InvalidStatusError(BoardParseError):
    """
    One of the four player status groups is malformed.

    * group: 0-3, which of the status groups
    * index: position of the offending value within the group
        (for a wrong arity, the first index that broke it)
    """

    def __init__(
        self, group: int, token: str, index: int, offset: Optional[int] = None
    ) -> None:
        super().__init__(
            f"Status group {group + 1} value {index + 1} ({token!r}) is not a "
            "non-negative integer or the group does not hold exactly 4 values.",
            field=group + 1,
            offset=offset,
        )
        self.group = group
        self.token = token
        self.index = index


class InvalidCounterError(BoardParseError):
    def __init__(self, token: str, offset: Optional[int] = None) -> None:
        super().__init__(
            f"Cannot interpret {token!r} as the halfmove counter "
            "(a non-negative integer).",
            field=5,
            offset=offset,
        )
        self.token = token


class InvalidExtraError(BoardParseError):
    def __init__(self, token: str, reason: str, offset: Optional[int] = None) -> None:
        super().__init__(
            f"Malformed extra options {token!r}: {reason}", field=6, offset=offset
        )
        self.token = token
        self.reason = reason


# --- BOARD FIELD ERRORS ---
class BoardLayoutError(BoardParseError):
    """
    Something is wrong inside the board field.

    * rank_index: position of the rank in the record, 0 being the first (top)
        rank written
    * column: the file (0-13) the scanner had reached
    """

    def __init__(
        self,
        message: str,
        rank_index: int,
        column: int,
        field: int = 6,
        offset: Optional[int] = None,
    ) -> None:
        super().__init__(message, field=field, offset=offset)
        self.rank_index = rank_index
        self.column = column

    @property
    def rank(self) -> int:
        """
        The board rank (0 = bottom) of the offending rank descriptor.
        Records are written top rank first.
        """
        return 13 - self.rank_index


class RankCountError(BoardParseError):
    def __init__(
        self, expected: int, actual: int, field: int = 6, offset: Optional[int] = None
    ) -> None:
        super().__init__(
            f"Expected {expected} '/' separated ranks, found {actual}. "
            "Make sure there is no missing rank and no leading or trailing '/'.",
            field=field,
            offset=offset,
        )
        self.expected = expected
        self.actual = actual


class RankLengthError(BoardLayoutError):
    def __init__(
        self,
        rank_index: int,
        columns: int,
        field: int = 6,
        offset: Optional[int] = None,
    ) -> None:
        problem = "Too many" if columns > 14 else "Not enough"
        super().__init__(
            f"{problem} columns in rank {rank_index + 1} of the record: "
            f"covers {columns} instead of 14.",
            rank_index=rank_index,
            column=columns,
            field=field,
            offset=offset,
        )
        self.columns = columns


class EmptySegmentError(BoardLayoutError):
    def __init__(
        self,
        rank_index: int,
        column: int,
        field: int = 6,
        offset: Optional[int] = None,
    ) -> None:
        super().__init__(
            f"Empty segment in rank {rank_index + 1} of the record at column {column}.",
            rank_index=rank_index,
            column=column,
            field=field,
            offset=offset,
        )


class InvalidRunLengthError(BoardLayoutError):
    def __init__(
        self,
        token: str,
        rank_index: int,
        column: int,
        field: int = 6,
        offset: Optional[int] = None,
    ) -> None:
        super().__init__(
            f"Segment {token!r} in rank {rank_index + 1} of the record starts with "
            "a digit but is not a positive number of empty squares.",
            rank_index=rank_index,
            column=column,
            field=field,
            offset=offset,
        )
        self.token = token


class InvalidPieceTokenError(BoardLayoutError):
    def __init__(
        self,
        token: str,
        reason: str,
        rank_index: int,
        column: int,
        field: int = 6,
        offset: Optional[int] = None,
    ) -> None:
        super().__init__(
            f"Cannot interpret {token!r} in rank {rank_index + 1} of the record "
            f"as a piece: {reason}",
            rank_index=rank_index,
            column=column,
            field=field,
            offset=offset,
        )
        self.token = token
        self.reason = reason


class UnknownPieceLetterError(BoardLayoutError):
    def __init__(
        self,
        letter: str,
        rank_index: int,
        column: int,
        field: int = 6,
        offset: Optional[int] = None,
    ) -> None:
        super().__init__(
            f"Unknown piece letter {letter!r} in rank {rank_index + 1} "
            f"of the record at column {column}.",
            rank_index=rank_index,
            column=column,
            field=field,
            offset=offset,
        )
        self.letter = letter


# shorter name
UnknownPieceLetter = UnknownPieceLetterError


class PieceOnRemovedSquareError(BoardLayoutError):
    def __init__(
        self,
        file: int,
        rank: int,
        token: str,
        rank_index: int,
        field: int = 6,
        offset: Optional[int] = None,
    ) -> None:
        super().__init__(
            f"Piece {token!r} placed on a removed corner square "
            f"(file {file}, rank {rank}).",
            rank_index=rank_index,
            column=file,
            field=field,
            offset=offset,
        )
        self.file = file
        self.token = token

    @property
    def square(self) -> tuple[int, int]:
        return (self.file, self.rank)
