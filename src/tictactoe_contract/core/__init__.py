"""Core board representation, codec and replay rules."""

from .board import (
    BOARD_SIZE,
    EMPTY_BOARD,
    EMPTY_MOVES,
    Board,
    Move,
    MoveLog,
    Symbol,
    decode_board,
    decode_move_log,
    encode_board,
    encode_move_log,
)
from .errors import ContractError, FormatError, RejectionKind, RuleViolation, ShapeError
from .game_state import GameState, new_linear_id
from .replay import (
    apply_move,
    has_valid_moves,
    is_alternating,
    is_pristine,
    is_self_consistent,
    replay,
)

__all__ = [
    "BOARD_SIZE",
    "EMPTY_BOARD",
    "EMPTY_MOVES",
    "Board",
    "Move",
    "MoveLog",
    "Symbol",
    "decode_board",
    "decode_move_log",
    "encode_board",
    "encode_move_log",
    "ContractError",
    "FormatError",
    "RejectionKind",
    "RuleViolation",
    "ShapeError",
    "GameState",
    "new_linear_id",
    "apply_move",
    "has_valid_moves",
    "is_alternating",
    "is_pristine",
    "is_self_consistent",
    "replay",
]
