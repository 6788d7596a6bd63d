"""Tests for the SQLite game store."""

import sqlite3

import pytest
from tictactoe_contract.core import GameState
from tictactoe_contract.storage import SQLiteGameStore


@pytest.fixture
def store():
    with SQLiteGameStore(":memory:") as store:
        yield store


def test_record_new_game(store):
    """Test a created game becomes the current state."""
    game = GameState.create("PartyA", "PartyB")

    stored = store.record(game)

    assert stored.seq == 0
    assert not stored.consumed
    assert store.latest_unconsumed(game.linear_id) == game
    assert store.count_games() == 1


def test_unknown_game(store):
    """Test lookups of unknown games return nothing."""
    assert store.latest_unconsumed("missing") is None
    assert store.history("missing") == []


def test_record_consumes_previous_state(store):
    """Test only the latest state stays unconsumed."""
    game0 = GameState.create("PartyA", "PartyB")
    game1 = game0.play("X", 1, 1)
    game2 = game1.play("O", 0, 0)

    store.record(game0)
    store.record(game1, consumed=game0)
    stored = store.record(game2, consumed=game1)

    assert stored.seq == 2
    assert store.latest_unconsumed(game0.linear_id) == game2

    history = store.history(game0.linear_id)
    assert [h.seq for h in history] == [0, 1, 2]
    assert [h.consumed for h in history] == [True, True, False]
    assert [h.state for h in history] == [game0, game1, game2]
    assert store.count_games() == 1


def test_record_rejects_stale_input(store):
    """Test a state can only be consumed once."""
    game0 = GameState.create("PartyA", "PartyB")
    store.record(game0)
    store.record(game0.play("X", 1, 1), consumed=game0)

    with pytest.raises(ValueError):
        store.record(game0.play("X", 2, 2), consumed=game0)


def test_record_rejects_duplicate_game(store):
    """Test a game can only be created once."""
    game = GameState.create("PartyA", "PartyB")
    store.record(game)

    with pytest.raises(ValueError):
        store.record(game)


def test_games_for_player(store):
    """Test lookups by either player identity."""
    first = GameState.create("PartyA", "PartyB")
    second = GameState.create("PartyC", "PartyA")
    third = GameState.create("PartyB", "PartyC")
    for game in (first, second, third):
        store.record(game)
    store.record(first.play("X", 0, 0), consumed=first)

    games = store.games_for_player("PartyA")

    assert {g.linear_id for g in games} == {first.linear_id, second.linear_id}
    assert all(g.moves == "0,0,X" for g in games if g.linear_id == first.linear_id)
    assert store.count_games() == 3


def test_file_backed_store(tmp_path):
    """Test states survive reopening the database."""
    db_path = str(tmp_path / "games.db")
    game = GameState.create("PartyA", "PartyB")

    with SQLiteGameStore(db_path) as store:
        store.record(game)

    with SQLiteGameStore(db_path) as store:
        assert store.latest_unconsumed(game.linear_id) == game


def test_failed_record_leaves_input_unconsumed(store):
    """Test a failed insert rolls back the consume of the input state."""
    game0 = GameState.create("PartyA", "PartyB")
    game1 = game0.play("X", 1, 1)
    store.record(game0)

    # Occupy the next slot so the insert hits the primary key
    store.conn.execute(
        "INSERT INTO tictactoe_states (linear_id, seq, player_x, player_o, board, moves, consumed)"
        " VALUES (?, 1, ?, ?, ?, ?, 1)",
        (game0.linear_id, game1.player_x, game1.player_o, game1.board, game1.moves),
    )
    store.conn.commit()

    with pytest.raises(sqlite3.IntegrityError):
        store.record(game1, consumed=game0)

    assert store.latest_unconsumed(game0.linear_id) == game0
    assert store.history(game0.linear_id)[0].consumed is False
