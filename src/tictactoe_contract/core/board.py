"""
Board and move-log representation with a canonical string codec.

Ledger records store the game as two strings:

    board: "r0c0,r0c1,r0c2|r1c0,r1c1,r1c2|r2c0,r2c1,r2c2"
    moves: "r,c,s|r,c,s|..."   ("" when no move was played)

Cells hold "", "X" or "O". Decoding tolerates whitespace around tokens;
encoding always produces the single canonical form, so two equal values
serialize to byte-identical strings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .errors import FormatError

BOARD_SIZE = 3
ROW_SEPARATOR = "|"
CELL_SEPARATOR = ","
MOVE_SEPARATOR = "|"
FIELD_SEPARATOR = ","

EMPTY_BOARD = ",,|,,|,,"
EMPTY_MOVES = ""


class Symbol(str, Enum):
    """Content of a single cell."""

    EMPTY = ""
    X = "X"
    O = "O"

    @classmethod
    def parse(cls, token: str) -> "Symbol":
        """Map a (possibly padded) token to a Symbol."""
        token = token.strip()
        for symbol in cls:
            if symbol.value == token:
                return symbol
        raise FormatError(f"Invalid symbol: {token!r}")

    @classmethod
    def parse_mark(cls, token: str) -> "Symbol":
        """Like parse(), but only X or O are accepted."""
        symbol = cls.parse(token)
        if symbol is cls.EMPTY:
            raise FormatError("Move symbol must be X or O")
        return symbol


Row = Tuple[Symbol, Symbol, Symbol]


@dataclass(frozen=True)
class Board:
    """
    Immutable 3x3 tic-tac-toe grid.

    cells[row][col], rows and columns indexed 0-2.
    """

    cells: Tuple[Row, ...]

    def __post_init__(self) -> None:
        """Validate grid dimensions."""
        if len(self.cells) != BOARD_SIZE:
            raise FormatError("Board must have 3 rows.")
        for row in self.cells:
            if len(row) != BOARD_SIZE:
                raise FormatError("Board must have 3 columns.")

    @classmethod
    def empty(cls) -> "Board":
        """Pristine board with every cell empty."""
        return cls(tuple(tuple(Symbol.EMPTY for _ in range(BOARD_SIZE)) for _ in range(BOARD_SIZE)))

    def get(self, row: int, col: int) -> Symbol:
        return self.cells[row][col]

    def with_cell(self, row: int, col: int, symbol: Symbol) -> "Board":
        """Return a copy of the board with one cell replaced."""
        rows = [list(r) for r in self.cells]
        rows[row][col] = symbol
        return Board(tuple(tuple(r) for r in rows))

    @property
    def is_empty(self) -> bool:
        """True if no cell holds a mark."""
        return all(cell is Symbol.EMPTY for row in self.cells for cell in row)

    @property
    def filled_cells(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is not Symbol.EMPTY)

    def __str__(self) -> str:
        """Human-readable grid."""
        lines = []
        for row in self.cells:
            lines.append(" " + " | ".join(cell.value or " " for cell in row))
        return "\n---+---+---\n".join(lines)


@dataclass(frozen=True)
class Move:
    """A single placement of X or O."""

    row: int
    col: int
    symbol: Symbol


MoveLog = Tuple[Move, ...]


def decode_board(serialized: str) -> Board:
    """
    Decode a board string.

    Args:
        serialized: Board in "a,b,c|d,e,f|g,h,i" form

    Returns:
        Decoded Board

    Raises:
        FormatError: if the row count, a row's cell count, or a cell token is invalid
    """
    if not isinstance(serialized, str):
        raise FormatError(f"Board must be a string, got {type(serialized).__name__}")
    rows = serialized.split(ROW_SEPARATOR)
    if len(rows) != BOARD_SIZE:
        raise FormatError("Board must have 3 rows.")

    cells = []
    for row in rows:
        tokens = row.split(CELL_SEPARATOR)
        if len(tokens) != BOARD_SIZE:
            raise FormatError("Board must have 3 columns.")
        cells.append(tuple(Symbol.parse(token) for token in tokens))

    return Board(tuple(cells))


def encode_board(board: Board) -> str:
    """Canonical board string."""
    return ROW_SEPARATOR.join(
        CELL_SEPARATOR.join(cell.value for cell in row) for row in board.cells
    )


def decode_move(serialized: str) -> Move:
    """Decode a single "row,col,symbol" token."""
    fields = [field.strip() for field in serialized.split(FIELD_SEPARATOR)]
    if len(fields) != 3:
        raise FormatError(f"Invalid serialized move: {serialized!r}")

    try:
        row = int(fields[0])
        col = int(fields[1])
    except ValueError:
        raise FormatError(f"Invalid serialized move: {serialized!r}") from None

    return Move(row=row, col=col, symbol=Symbol.parse_mark(fields[2]))


def encode_move(move: Move) -> str:
    return f"{move.row}{FIELD_SEPARATOR}{move.col}{FIELD_SEPARATOR}{move.symbol.value}"


def decode_move_log(serialized: str) -> MoveLog:
    """
    Decode a move-log string.

    Empty tokens are dropped, so "" decodes to no moves and a trailing
    separator ("1,1,X|") is tolerated.

    Raises:
        FormatError: if a token is not "row,col,symbol" with integer coordinates
    """
    if not isinstance(serialized, str):
        raise FormatError(f"Move log must be a string, got {type(serialized).__name__}")
    tokens = [token for token in serialized.split(MOVE_SEPARATOR) if token.strip()]
    return tuple(decode_move(token) for token in tokens)


def encode_move_log(moves: MoveLog) -> str:
    """Canonical move-log string."""
    return MOVE_SEPARATOR.join(encode_move(move) for move in moves)
