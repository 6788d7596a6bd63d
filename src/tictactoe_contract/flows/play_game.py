"""Flow that plays one move in an existing game."""

import logging

from ..contract import Play, Transition
from ..core.board import BOARD_SIZE, Symbol
from ..core.errors import ContractError
from ..core.game_state import GameState
from .base import GENERATING_TRANSACTION, Flow, FlowError

logger = logging.getLogger(__name__)


class PlayGameFlow(Flow):
    """Place a symbol on the current board of a game."""

    def call(self, linear_id: str, symbol: str, row: int, col: int) -> GameState:
        """
        Play one move and record the new state.

        Args:
            linear_id: Game identifier
            symbol: "X" or "O"
            row: Row index (0-2)
            col: Column index (0-2)

        Returns:
            Recorded GameState after the move

        Raises:
            FlowError: if the game is unknown, the move is malformed or the
                transition is rejected
        """
        self._step(GENERATING_TRANSACTION)

        game = self.store.latest_unconsumed(linear_id)
        if game is None:
            raise FlowError("Game doesn't exist!")
        logger.info(f"Existing game board is {game}")

        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise FlowError("Cannot place a symbol outside the board.")
        if symbol not in (Symbol.X.value, Symbol.O.value):
            raise FlowError("The only accepted symbols are X and O.")

        other_player = game.player_o if self.me == game.player_x else game.player_x
        logger.info(f"Moving player is {self.me}, other player is {other_player}")

        try:
            new_game = game.play(symbol, row, col)
        except ContractError as e:
            raise FlowError(f"Contract verification failed: {e.message}") from e
        logger.info(f"New game board is {new_game}")

        return self._verify_and_record(Transition.play(Play(row, col, symbol), game, new_game))
