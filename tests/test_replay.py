"""Tests for move replay rules."""

import pytest
from tictactoe_contract.core import (
    EMPTY_BOARD,
    Board,
    Move,
    RuleViolation,
    Symbol,
    apply_move,
    decode_board,
    decode_move_log,
    encode_board,
    encode_move_log,
    has_valid_moves,
    is_alternating,
    is_pristine,
    is_self_consistent,
    replay,
)


def test_replay_empty_log():
    """Test replaying no moves gives the empty board."""
    assert encode_board(replay(())) == EMPTY_BOARD


def test_apply_moves_in_order():
    """Test placing symbols one after another."""
    board, moves = Board.empty(), ()

    board, moves = apply_move(board, moves, Move(1, 1, Symbol.X))
    assert encode_board(board) == ",,|,X,|,,"
    assert encode_move_log(moves) == "1,1,X"

    board, moves = apply_move(board, moves, Move(0, 2, Symbol.O))
    assert encode_board(board) == ",,O|,X,|,,"
    assert encode_move_log(moves) == "1,1,X|0,2,O"

    board, moves = apply_move(board, moves, Move(2, 0, Symbol.X))
    assert encode_board(board) == ",,O|,X,|X,,"
    assert encode_move_log(moves) == "1,1,X|0,2,O|2,0,X"


def test_apply_move_does_not_mutate_inputs():
    """Test apply_move returns new values."""
    board, moves = Board.empty(), ()
    apply_move(board, moves, Move(0, 0, Symbol.X))

    assert board.is_empty
    assert moves == ()


def test_apply_move_overwrites_occupied_cell():
    """Test overwriting is left to the rule layer."""
    moves = decode_move_log("1,1,X|1,1,O")

    assert encode_board(replay(moves)) == ",,|,O,|,,"


def test_apply_move_out_of_bounds():
    """Test coordinates outside 0-2 are rejected."""
    for move in [Move(3, 1, Symbol.X), Move(-1, 0, Symbol.X), Move(0, 3, Symbol.O), Move(0, -1, Symbol.O)]:
        with pytest.raises(RuleViolation) as excinfo:
            apply_move(Board.empty(), (), move)
        assert excinfo.value.rule == RuleViolation.OUT_OF_BOUNDS


def test_self_consistency():
    """Test board must equal the replay of its moves."""
    moves = decode_move_log("1,1,X|0,0,O")

    assert is_self_consistent(decode_board("O,,|,X,|,,"), moves)
    assert not is_self_consistent(decode_board(",,|,X,|,,"), moves)
    assert not is_self_consistent(decode_board(EMPTY_BOARD), decode_move_log("1,1,X"))
    assert is_self_consistent(decode_board(EMPTY_BOARD), ())


def test_alternation():
    """Test symbols must strictly alternate."""
    assert is_alternating(())
    assert is_alternating(decode_move_log("1,1,X"))
    assert is_alternating(decode_move_log("1,1,O"))
    assert is_alternating(decode_move_log("1,1,X|0,0,O|2,2,X"))
    assert is_alternating(decode_move_log("1,1,O|0,0,X"))

    # Same first two symbols
    assert not is_alternating(decode_move_log("1,1,X|1,0,X"))
    # Breaks later in the log
    assert not is_alternating(decode_move_log("1,1,X|0,0,O|2,2,O"))


def test_derivation_closure():
    """Test a legal next move keeps the pair valid."""
    board, moves = Board.empty(), ()
    symbol = Symbol.X
    for row, col in [(1, 1), (0, 0), (2, 2), (0, 2), (2, 0)]:
        board, moves = apply_move(board, moves, Move(row, col, symbol))
        assert has_valid_moves(board, moves)
        assert encode_board(replay(moves)) == encode_board(board)
        symbol = Symbol.O if symbol is Symbol.X else Symbol.X


def test_pristine():
    """Test pristine needs both an empty board and an empty log."""
    assert is_pristine(Board.empty(), ())
    assert not is_pristine(decode_board(",,|,X,|,,"), ())
    assert not is_pristine(Board.empty(), decode_move_log("1,1,X"))
