"""Flow that starts a new game against another party."""

import logging

from ..contract import Transition
from ..core.game_state import GameState
from .base import GENERATING_TRANSACTION, Flow

logger = logging.getLogger(__name__)


class CreateGameFlow(Flow):
    """The party running the flow plays X, the other party plays O."""

    def call(self, other_player: str) -> GameState:
        """
        Create and record a pristine game.

        Args:
            other_player: Identity of the opponent

        Returns:
            Recorded GameState

        Raises:
            FlowError: if the transition is rejected
        """
        self._step(GENERATING_TRANSACTION)
        game = GameState.create(player_x=self.me, player_o=other_player)
        logger.info(f"Game board is {game}")

        return self._verify_and_record(Transition.create(game))
