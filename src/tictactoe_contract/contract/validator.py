"""
Transition validator.

Every party runs validate() over the same candidate transition and must
reach the same verdict, so this module is a pure function of its inputs:
no I/O, no clocks, no shared state.

Checks run in a fixed order and the first failing check is the reported
reason. Global checks come first:
1. exactly one command
2. exactly one output state
3. distinct players
4. output board decodes

then the command-specific rules for Create or Play.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple

from ..core.board import Board, MoveLog, decode_board, decode_move_log, encode_board, encode_move_log
from ..core.errors import ContractError, RuleViolation, ShapeError
from ..core.game_state import GameState
from ..core.replay import apply_move, has_valid_moves, is_pristine
from .commands import Command, CommandKind, Create, Play
from .verdict import Accepted, Rejected, Verdict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """Candidate transaction as assembled by the ledger layer."""

    commands: Tuple[Command, ...]
    inputs: Tuple[GameState, ...] = ()
    outputs: Tuple[GameState, ...] = ()
    reference_count: int = 0

    @classmethod
    def create(cls, output: GameState) -> "Transition":
        return cls(commands=(Create(),), outputs=(output,))

    @classmethod
    def play(cls, command: Play, input_state: GameState, output: GameState) -> "Transition":
        return cls(commands=(command,), inputs=(input_state,), outputs=(output,))


def _require(condition: bool, error: ContractError) -> None:
    if not condition:
        raise error


def _decode(state: GameState) -> Tuple[Board, MoveLog]:
    return decode_board(state.board), decode_move_log(state.moves)


def _verify_create(command: Create, inputs: Sequence[GameState], outputs: Sequence[GameState], reference_count: int) -> None:
    _require(len(inputs) == 0 and len(outputs) == 1, ShapeError("Zero Input and One Output Expected"))

    board, moves = _decode(outputs[0])
    _require(is_pristine(board, moves), RuleViolation("Output state must be a pristine TicTacToe board."))


def _verify_play(command: Play, inputs: Sequence[GameState], outputs: Sequence[GameState], reference_count: int) -> None:
    _require(reference_count == 0, ShapeError("No reference expected"))
    _require(len(inputs) == 1 and len(outputs) == 1, ShapeError("One Input and One Output Expected"))

    input_board, input_moves = _decode(inputs[0])
    output_board, output_moves = _decode(outputs[0])

    _require(
        len(output_moves) == len(input_moves) + 1,
        RuleViolation("Output state must have exactly one more than the input."),
    )
    _require(has_valid_moves(input_board, input_moves), RuleViolation("Input state has invalid moves."))
    _require(has_valid_moves(output_board, output_moves), RuleViolation("Output state has invalid moves."))

    last_move = output_moves[-1]
    _require(
        last_move.row == command.row
        and last_move.col == command.col
        and last_move.symbol.value == command.symbol,
        RuleViolation("Command must match last move."),
    )

    derived_board, derived_moves = apply_move(input_board, input_moves, last_move)
    _require(
        encode_board(derived_board) == encode_board(output_board)
        and encode_move_log(derived_moves) == encode_move_log(output_moves),
        RuleViolation(
            "The output state does not derive correctly from the input state by applying the last move."
        ),
    )


_VERIFIERS: Dict[CommandKind, Callable[..., None]] = {
    CommandKind.CREATE: _verify_create,
    CommandKind.PLAY: _verify_play,
}


def _check(commands: Sequence[Command], inputs: Sequence[GameState], outputs: Sequence[GameState], reference_count: int) -> None:
    _require(len(commands) == 1, ShapeError("One command Expected"))
    _require(len(outputs) == 1, ShapeError("Only one output state should be created."))

    output = outputs[0]
    _require(output.player_x != output.player_o, RuleViolation("The players cannot be the same entity."))
    decode_board(output.board)

    command = commands[0]
    verifier = _VERIFIERS.get(getattr(command, "kind", None))
    if verifier is None:
        raise ShapeError(f"Unsupported command: {command!r}")
    verifier(command, inputs, outputs, reference_count)


def validate(
    commands: Sequence[Command],
    inputs: Sequence[GameState] = (),
    outputs: Sequence[GameState] = (),
    reference_count: int = 0,
) -> Verdict:
    """
    Decide whether a candidate transition is valid.

    Args:
        commands: Commands attached to the transaction (exactly one expected)
        inputs: Consumed game states
        outputs: Produced game states
        reference_count: Number of reference (read-only) states

    Returns:
        Accepted, or Rejected carrying the kind and message of the first failed check
    """
    try:
        _check(commands, inputs, outputs, reference_count)
    except ContractError as e:
        logger.debug(f"Transition rejected ({e.kind.value}): {e.message}")
        return Rejected(kind=e.kind, message=e.message)
    return Accepted()


def verify_transition(transition: Transition) -> Verdict:
    """validate() over a Transition value."""
    return validate(
        transition.commands,
        transition.inputs,
        transition.outputs,
        transition.reference_count,
    )
