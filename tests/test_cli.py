"""Tests for the command-line interface."""

import json

from tictactoe_contract.cli.main import main, transition_from_dict
from tictactoe_contract.contract import CommandKind
from tictactoe_contract.storage import SQLiteGameStore


def test_verify_create():
    """Test verify exits 0 for a pristine create."""
    assert main(["verify", "--command", "create", "--output-board", ",,|,,|,,"]) == 0


def test_verify_play_accepted():
    """Test verify exits 0 for a valid play."""
    argv = [
        "verify", "--command", "play", "--row", "1", "--col", "1", "--symbol", "X",
        "--input-board", ",,|,,|,,",
        "--output-board", ",,|,X,|,,", "--output-moves", "1,1,X",
    ]
    assert main(argv) == 0


def test_verify_play_rejected():
    """Test verify exits 1 for a command that does not match the last move."""
    argv = [
        "verify", "--command", "play", "--row", "0", "--col", "1", "--symbol", "X",
        "--input-board", ",,|,,|,,",
        "--output-board", ",,|,X,|,,", "--output-moves", "1,1,X",
    ]
    assert main(argv) == 1


def test_verify_play_needs_coordinates():
    """Test play without a move is a usage error."""
    assert main(["verify", "--command", "play", "--output-board", ",,|,,|,,"]) == 2


def test_transition_from_dict():
    """Test the JSON form of a transition."""
    transition = transition_from_dict(
        {
            "command": "play",
            "row": 1,
            "col": 1,
            "symbol": "X",
            "inputs": [{"player_x": "A", "player_o": "B", "board": ",,|,,|,,"}],
            "outputs": [{"player_x": "A", "player_o": "B", "board": ",,|,X,|,,", "moves": "1,1,X"}],
        }
    )

    assert transition.commands[0].kind == CommandKind.PLAY
    assert transition.inputs[0].moves == ""
    assert transition.outputs[0].moves == "1,1,X"
    assert transition.reference_count == 0


def test_verify_batch(tmp_path):
    """Test batch verification reports any rejection through the exit code."""
    players = {"player_x": "A", "player_o": "B"}
    good = [
        {"command": "create", "outputs": [dict(players, board=",,|,,|,,")]},
        {
            "command": "play", "row": 1, "col": 1, "symbol": "X",
            "inputs": [dict(players, board=",,|,,|,,")],
            "outputs": [dict(players, board=",,|,X,|,,", moves="1,1,X")],
        },
    ]
    bad = {"command": "create", "outputs": [dict(players, board=",,|,X,|,,", moves="1,1,X")]}

    good_path = tmp_path / "good.jsonl"
    good_path.write_text("\n".join(json.dumps(t) for t in good) + "\n")
    assert main(["verify-batch", str(good_path), "--no-progress"]) == 0

    bad_path = tmp_path / "bad.jsonl"
    bad_path.write_text("\n".join(json.dumps(t) for t in good + [bad]))
    assert main(["verify-batch", str(bad_path), "--no-progress"]) == 1

    malformed_path = tmp_path / "malformed.jsonl"
    malformed_path.write_text("{not json}\n")
    assert main(["verify-batch", str(malformed_path), "--no-progress"]) == 1

    not_object_path = tmp_path / "not_object.jsonl"
    not_object_path.write_text("[1, 2]\n")
    assert main(["verify-batch", str(not_object_path), "--no-progress"]) == 1

    null_moves = {"command": "create", "outputs": [dict(players, board=",,|,,|,,", moves=None)]}
    null_path = tmp_path / "null_moves.jsonl"
    null_path.write_text(json.dumps(null_moves) + "\n")
    assert main(["verify-batch", str(null_path), "--no-progress"]) == 1


def test_new_play_show(tmp_path):
    """Test a game played through the CLI."""
    db_path = str(tmp_path / "games.db")

    assert main(["new", "--me", "PartyA", "--opponent", "PartyB", "--db-path", db_path]) == 0

    with SQLiteGameStore(db_path) as store:
        (game,) = store.games_for_player("PartyA")

    play = ["play", "--db-path", db_path, "--game-id", game.linear_id]
    assert main(play + ["--me", "PartyA", "--symbol", "X", "--row", "1", "--col", "1"]) == 0
    assert main(play + ["--me", "PartyB", "--symbol", "X", "--row", "0", "--col", "0"]) == 1
    assert main(play + ["--me", "PartyB", "--symbol", "O", "--row", "0", "--col", "0"]) == 0

    assert main(["show", "--db-path", db_path, "--game-id", game.linear_id, "--history"]) == 0
    assert main(["show", "--db-path", db_path, "--player", "PartyB"]) == 0
    assert main(["show", "--db-path", db_path, "--game-id", "missing"]) == 1

    with SQLiteGameStore(db_path) as store:
        assert store.latest_unconsumed(game.linear_id).moves == "1,1,X|0,0,O"


def test_no_command():
    """Test running without a subcommand prints help."""
    assert main([]) == 1
