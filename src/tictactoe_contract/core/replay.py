"""
Deterministic move replay.

Replaying a move log onto an empty board is how every node proves, on its
own, that a recorded board really is the product of its recorded moves:
- Moves are applied in log order
- Overwriting an occupied cell is allowed here (legality is a rule concern)
- Coordinates outside the board are rejected
"""

from typing import Tuple

from .board import BOARD_SIZE, Board, Move, MoveLog, encode_board
from .errors import RuleViolation


def apply_move(board: Board, moves: MoveLog, move: Move) -> Tuple[Board, MoveLog]:
    """
    Apply one move to a board and its log.

    Args:
        board: Current board
        moves: Moves that produced the board
        move: Move to append

    Returns:
        (new_board, new_moves) - inputs are left untouched

    Raises:
        RuleViolation: if row or col falls outside the board
    """
    if move.row < 0 or move.row >= BOARD_SIZE:
        raise RuleViolation("Row falls outside the board.", rule=RuleViolation.OUT_OF_BOUNDS)
    if move.col < 0 or move.col >= BOARD_SIZE:
        raise RuleViolation("Col falls outside the board.", rule=RuleViolation.OUT_OF_BOUNDS)

    return board.with_cell(move.row, move.col, move.symbol), moves + (move,)


def replay(moves: MoveLog) -> Board:
    """
    Rebuild the board a move log describes.

    Args:
        moves: Ordered moves

    Returns:
        Board obtained by applying every move to an empty board
    """
    board = Board.empty()
    applied: MoveLog = ()
    for move in moves:
        board, applied = apply_move(board, applied, move)
    return board


def is_self_consistent(board: Board, moves: MoveLog) -> bool:
    """True if replaying the moves yields exactly this board."""
    return encode_board(replay(moves)) == encode_board(board)


def is_alternating(moves: MoveLog) -> bool:
    """
    Check that symbols strictly alternate.

    Logs with fewer than two moves are vacuously alternating. Otherwise the
    first two symbols must differ and every even index repeats the first
    symbol, every odd index the second.
    """
    if len(moves) < 2:
        return True

    first_symbol = moves[0].symbol
    second_symbol = moves[1].symbol
    if first_symbol == second_symbol:
        return False

    for index, move in enumerate(moves):
        expected = first_symbol if index % 2 == 0 else second_symbol
        if move.symbol != expected:
            return False

    return True


def has_valid_moves(board: Board, moves: MoveLog) -> bool:
    """Self-consistent and alternating."""
    return is_self_consistent(board, moves) and is_alternating(moves)


def is_pristine(board: Board, moves: MoveLog) -> bool:
    """True for an empty move log on an all-empty board."""
    return not moves and board.is_empty
