"""
Ledger record for one snapshot of a tic-tac-toe game.

A GameState is never mutated: a Create transition produces the first
record of a game and every Play transition supersedes the previous record
with a new one carrying the same linear_id, the same players and one more
move.

board and moves are kept exactly as recorded on the ledger. Records that
arrive from other parties may be malformed; judging them is the
validator's job, so nothing here decodes eagerly.
"""

import uuid
from dataclasses import dataclass, field
from typing import List

from .board import (
    EMPTY_BOARD,
    EMPTY_MOVES,
    Move,
    Symbol,
    decode_board,
    decode_move_log,
    encode_board,
    encode_move_log,
)
from .replay import apply_move


def new_linear_id() -> str:
    """Fresh game identifier."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class GameState:
    """Shared state of a single game between two parties."""

    player_x: str  # Party playing X
    player_o: str  # Party playing O
    board: str  # Serialized board
    moves: str  # Serialized move log
    linear_id: str = field(default_factory=new_linear_id)

    @classmethod
    def create(cls, player_x: str, player_o: str) -> "GameState":
        """Pristine game between two parties."""
        return cls(player_x=player_x, player_o=player_o, board=EMPTY_BOARD, moves=EMPTY_MOVES)

    @property
    def participants(self) -> List[str]:
        return [self.player_x, self.player_o]

    def play(self, symbol: str, row: int, col: int) -> "GameState":
        """
        Build the successor record after one move.

        Args:
            symbol: "X" or "O"
            row: Row index (0-2)
            col: Column index (0-2)

        Returns:
            New GameState with the same players and linear_id

        Raises:
            FormatError: if this record or the symbol cannot be decoded
            RuleViolation: if the coordinates fall outside the board
        """
        move = Move(row=row, col=col, symbol=Symbol.parse_mark(symbol))
        board, moves = apply_move(decode_board(self.board), decode_move_log(self.moves), move)
        return GameState(
            player_x=self.player_x,
            player_o=self.player_o,
            board=encode_board(board),
            moves=encode_move_log(moves),
            linear_id=self.linear_id,
        )

    def __str__(self) -> str:
        return f"GameState({self.linear_id}: X={self.player_x}, O={self.player_o}, board={self.board!r}, moves={self.moves!r})"
