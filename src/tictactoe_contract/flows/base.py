"""
Shared machinery for Create/Play orchestration.

A flow builds one candidate transition, runs the validator exactly once
and records the result only when it is accepted. A rejection stops the
flow before anything is written.
"""

import logging
from typing import Optional

from ..contract import Transition, verify_transition
from ..core.game_state import GameState
from ..storage.base import GameStore

logger = logging.getLogger(__name__)

GENERATING_TRANSACTION = "Generating transaction."
VERIFYING_TRANSACTION = "Verifying contract constraints."
RECORDING_TRANSACTION = "Recording transaction."


class FlowError(Exception):
    """A flow could not complete; nothing was recorded."""


class Flow:
    """
    Base class for game flows.

    The store is injected; flows never reach for a global ledger.
    """

    def __init__(self, store: GameStore, me: str):
        """
        Args:
            store: Store used to look up and record game states
            me: Identity of the party running the flow
        """
        self.store = store
        self.me = me
        self.current_step: Optional[str] = None

    def _step(self, step: str) -> None:
        self.current_step = step
        logger.info(f"[{self.me}] {step}")

    def _verify_and_record(self, transition: Transition) -> GameState:
        """Validate the transition and record its single output."""
        self._step(VERIFYING_TRANSACTION)
        verdict = verify_transition(transition)
        if not verdict.accepted:
            raise FlowError(f"Contract verification failed: {verdict.message}")

        self._step(RECORDING_TRANSACTION)
        output = transition.outputs[0]
        consumed = transition.inputs[0] if transition.inputs else None
        try:
            self.store.record(output, consumed=consumed)
        except ValueError as e:
            raise FlowError(str(e)) from e
        return output
