"""
Main CLI for the tic-tac-toe transition contract.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from ..contract import Create, Play, Transition, verify_transition
from ..core import FormatError, GameState, decode_board, decode_move_log
from ..flows import CreateGameFlow, FlowError, PlayGameFlow
from ..storage import GameStore, SQLiteGameStore
from ..utils.rich_display import GameDisplay, setup_rich_logging


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def open_store(args) -> GameStore:
    """Open the store selected by --backend."""
    if args.backend == "postgresql":
        from ..storage.postgresql import PostgreSQLGameStore

        return PostgreSQLGameStore(
            host=args.pg_host,
            port=args.pg_port,
            database=args.pg_database,
            user=args.pg_user,
            password=args.pg_password,
        )

    db_path = Path(args.db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return SQLiteGameStore(str(db_path))


def _require_dict(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(value).__name__}")
    return value


def _require_list(value: Any, what: str) -> List[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a JSON array, got {type(value).__name__}")
    return value


def _state_from_dict(data: Any) -> GameState:
    data = _require_dict(data, "state")
    kwargs = {
        "player_x": data["player_x"],
        "player_o": data["player_o"],
        "board": data["board"],
        "moves": data.get("moves", ""),
    }
    if data.get("linear_id"):
        kwargs["linear_id"] = data["linear_id"]
    for key, value in kwargs.items():
        if not isinstance(value, str):
            raise ValueError(f"state field {key!r} must be a string, got {type(value).__name__}")
    return GameState(**kwargs)


def transition_from_dict(data: Any) -> Transition:
    """
    Build a Transition from its JSON form.

    Example:
        {"command": "play", "row": 1, "col": 1, "symbol": "X",
         "inputs": [{"player_x": "A", "player_o": "B", "board": ",,|,,|,,", "moves": ""}],
         "outputs": [{"player_x": "A", "player_o": "B", "board": ",,|,X,|,,", "moves": "1,1,X"}]}

    "commands" may be given instead of "command" as a list of such objects.

    Raises:
        ValueError: if the JSON does not have this shape
    """
    data = _require_dict(data, "transition")
    raw_commands = data.get("commands")
    if raw_commands is None:
        raw_commands = [data]

    commands = []
    for raw in _require_list(raw_commands, "commands"):
        name = _require_dict(raw, "command")["command"]
        if name == "create":
            commands.append(Create())
        elif name == "play":
            commands.append(Play(row=int(raw["row"]), col=int(raw["col"]), symbol=str(raw["symbol"])))
        else:
            raise ValueError(f"Unknown command: {name!r}")

    return Transition(
        commands=tuple(commands),
        inputs=tuple(_state_from_dict(s) for s in _require_list(data.get("inputs", []), "inputs")),
        outputs=tuple(_state_from_dict(s) for s in _require_list(data.get("outputs", []), "outputs")),
        reference_count=int(data.get("references", 0)),
    )


def verify_command(args) -> int:
    """Verify a single transition given as raw strings."""
    setup_logging(args.log_level)
    display = GameDisplay()

    inputs: List[GameState] = []
    if args.input_board is not None:
        inputs.append(
            GameState(
                player_x=args.player_x,
                player_o=args.player_o,
                board=args.input_board,
                moves=args.input_moves,
            )
        )
    output = GameState(
        player_x=args.player_x,
        player_o=args.player_o,
        board=args.output_board,
        moves=args.output_moves,
    )

    if args.command_name == "play":
        if args.row is None or args.col is None or args.symbol is None:
            display.log_error("play needs --row, --col and --symbol")
            return 2
        command = Play(row=args.row, col=args.col, symbol=args.symbol)
    else:
        command = Create()

    transition = Transition(
        commands=(command,),
        inputs=tuple(inputs),
        outputs=(output,),
        reference_count=args.references,
    )
    verdict = verify_transition(transition)
    display.show_verdict(verdict, label=args.command_name.capitalize())
    return 0 if verdict.accepted else 1


def verify_batch_command(args) -> int:
    """Verify a JSON-lines file of transitions."""
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)
    display = GameDisplay()

    lines = Path(args.path).read_text().splitlines()
    accepted = 0
    rejected = 0
    malformed = 0

    for line_no, line in enumerate(tqdm(lines, desc="Verifying", unit="tx", disable=args.no_progress), start=1):
        if not line.strip():
            continue
        try:
            transition = transition_from_dict(json.loads(line))
        except (ValueError, KeyError, TypeError) as e:
            malformed += 1
            display.log_error(f"line {line_no}: cannot parse transition: {e}")
            continue

        verdict = verify_transition(transition)
        if verdict.accepted:
            accepted += 1
        else:
            rejected += 1
            display.show_verdict(verdict, label=f"line {line_no}")

    logger.info(f"Accepted: {accepted:,} | Rejected: {rejected:,} | Malformed: {malformed:,}")
    display.log_info(f"{accepted} accepted, {rejected} rejected, {malformed} malformed")
    return 0 if rejected == 0 and malformed == 0 else 1


def new_command(args) -> int:
    """Create a new game."""
    setup_rich_logging(args.log_level)
    display = GameDisplay()

    store = open_store(args)
    try:
        game = CreateGameFlow(store, me=args.me).call(args.opponent)
    except FlowError as e:
        display.log_error(str(e))
        return 1
    finally:
        store.close()

    display.log_success(f"Created game {game.linear_id}")
    display.show_game(game, decode_board(game.board), decode_move_log(game.moves))
    return 0


def play_command(args) -> int:
    """Play one move in an existing game."""
    setup_rich_logging(args.log_level)
    display = GameDisplay()

    store = open_store(args)
    try:
        game = PlayGameFlow(store, me=args.me).call(args.game_id, args.symbol, args.row, args.col)
    except FlowError as e:
        display.log_error(str(e))
        return 1
    finally:
        store.close()

    display.show_game(game, decode_board(game.board), decode_move_log(game.moves))
    return 0


def show_command(args) -> int:
    """Show a game, or every current game of a player."""
    setup_rich_logging(args.log_level)
    display = GameDisplay()

    store = open_store(args)
    try:
        if args.game_id:
            games = []
            game = store.latest_unconsumed(args.game_id)
            if game is not None:
                games.append(game)
            history = store.history(args.game_id) if args.history else []
        else:
            games = store.games_for_player(args.player)
            history = []
    finally:
        store.close()

    if not games:
        display.log_warning("No game found")
        return 1

    for game in games:
        try:
            display.show_game(game, decode_board(game.board), decode_move_log(game.moves))
        except FormatError as e:
            display.log_error(f"{game.linear_id}: unreadable record: {e}")
    if history:
        display.show_history(history)
    return 0


def _add_store_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--backend", choices=["sqlite", "postgresql"], default="sqlite", help="Storage backend"
    )
    parser.add_argument(
        "--db-path", default="data/tictactoe.db", help="Path to SQLite database file"
    )
    parser.add_argument("--pg-host", default="localhost")
    parser.add_argument("--pg-port", type=int, default=5432)
    parser.add_argument("--pg-database", default="tictactoe")
    parser.add_argument("--pg-user", default="postgres")
    parser.add_argument("--pg-password", default="")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description="Tic-tac-toe transition contract")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Verify command
    verify_parser = subparsers.add_parser("verify", help="Verify a single transition")
    verify_parser.add_argument(
        "--command", dest="command_name", choices=["create", "play"], required=True
    )
    verify_parser.add_argument("--row", type=int, default=None)
    verify_parser.add_argument("--col", type=int, default=None)
    verify_parser.add_argument("--symbol", default=None)
    verify_parser.add_argument("--player-x", default="PartyA")
    verify_parser.add_argument("--player-o", default="PartyB")
    verify_parser.add_argument(
        "--input-board", default=None, help="Input board (omit for no input state)"
    )
    verify_parser.add_argument("--input-moves", default="")
    verify_parser.add_argument("--output-board", required=True)
    verify_parser.add_argument("--output-moves", default="")
    verify_parser.add_argument(
        "--references", type=int, default=0, help="Number of reference states"
    )
    verify_parser.set_defaults(func=verify_command)

    # Batch verify command
    batch_parser = subparsers.add_parser(
        "verify-batch", help="Verify a JSON-lines file of transitions"
    )
    batch_parser.add_argument("path", help="File with one JSON transition per line")
    batch_parser.add_argument(
        "--no-progress", action="store_true", help="Disable the progress bar"
    )
    batch_parser.set_defaults(func=verify_batch_command)

    # New game command
    new_parser = subparsers.add_parser("new", help="Create a new game")
    new_parser.add_argument("--me", required=True, help="Your identity (plays X)")
    new_parser.add_argument("--opponent", required=True, help="Opponent identity (plays O)")
    _add_store_arguments(new_parser)
    new_parser.set_defaults(func=new_command)

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a move")
    play_parser.add_argument("--me", required=True, help="Your identity")
    play_parser.add_argument("--game-id", required=True)
    play_parser.add_argument("--symbol", required=True)
    play_parser.add_argument("--row", type=int, required=True)
    play_parser.add_argument("--col", type=int, required=True)
    _add_store_arguments(play_parser)
    play_parser.set_defaults(func=play_command)

    # Show command
    show_parser = subparsers.add_parser("show", help="Show games")
    target = show_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--game-id")
    target.add_argument("--player")
    show_parser.add_argument(
        "--history", action="store_true", help="Also list consumed states"
    )
    _add_store_arguments(show_parser)
    show_parser.set_defaults(func=show_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
