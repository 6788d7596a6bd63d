"""Tests for game state records."""

import pytest
from tictactoe_contract.core import EMPTY_BOARD, FormatError, GameState, RuleViolation


def test_create_game_state():
    """Test basic game state creation."""
    state = GameState.create(player_x="PartyA", player_o="PartyB")

    assert state.player_x == "PartyA"
    assert state.player_o == "PartyB"
    assert state.board == EMPTY_BOARD
    assert state.moves == ""
    assert state.participants == ["PartyA", "PartyB"]


def test_fresh_identifiers():
    """Test every created game gets its own identifier."""
    first = GameState.create("PartyA", "PartyB")
    second = GameState.create("PartyA", "PartyB")

    assert first.linear_id != second.linear_id


def test_play_builds_successor():
    """Test play returns a new record and leaves the old one alone."""
    state = GameState.create("PartyA", "PartyB")

    after_x = state.play("X", 1, 1)
    after_o = after_x.play("O", 0, 0)

    assert state.board == EMPTY_BOARD
    assert after_x.board == ",,|,X,|,,"
    assert after_x.moves == "1,1,X"
    assert after_o.board == "O,,|,X,|,,"
    assert after_o.moves == "1,1,X|0,0,O"
    assert after_o.linear_id == state.linear_id
    assert after_o.participants == state.participants


def test_play_canonicalizes_legacy_move_log():
    """Test a trailing separator in the stored log is dropped on re-encoding."""
    state = GameState("PartyA", "PartyB", ",,|,X,|,,", "1,1,X|", linear_id="game-1")

    assert state.play("O", 2, 2).moves == "1,1,X|2,2,O"


def test_play_validation():
    """Test play rejects bad symbols and coordinates."""
    state = GameState.create("PartyA", "PartyB")

    with pytest.raises(FormatError):
        state.play("A", 1, 1)

    with pytest.raises(RuleViolation):
        state.play("X", 3, 1)


def test_state_is_immutable():
    """Test records cannot be changed in place."""
    state = GameState.create("PartyA", "PartyB")

    with pytest.raises(AttributeError):
        state.board = ",,|,X,|,,"
