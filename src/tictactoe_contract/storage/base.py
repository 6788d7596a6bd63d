"""Abstract base classes for game state storage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..core.game_state import GameState


@dataclass
class StoredGame:
    """
    Represents one recorded game state in the store.
    """

    state: GameState
    seq: int  # Position in the game's history (0 = created)
    consumed: bool = False  # True once a later state superseded it


class LedgerQuery(ABC):
    """Read-only lookup that flows use to find the current state of a game."""

    @abstractmethod
    def latest_unconsumed(self, linear_id: str) -> Optional[GameState]:
        """
        Most recent unconsumed state for a game.

        Args:
            linear_id: Game identifier

        Returns:
            GameState or None if the game is unknown
        """
        pass


class GameStore(LedgerQuery):
    """Abstract interface for game state storage."""

    @abstractmethod
    def record(self, output: GameState, consumed: Optional[GameState] = None) -> StoredGame:
        """
        Record a new state, marking the state it supersedes as consumed.

        Args:
            output: Newly agreed state
            consumed: Input state of the transition, None for a new game

        Returns:
            Stored record of output

        Raises:
            ValueError: if consumed is not the game's current unconsumed state
        """
        pass

    @abstractmethod
    def history(self, linear_id: str) -> List[StoredGame]:
        """
        All recorded states of a game, oldest first.

        Args:
            linear_id: Game identifier

        Returns:
            List of stored states (empty if unknown)
        """
        pass

    @abstractmethod
    def games_for_player(self, party: str) -> List[GameState]:
        """
        Unconsumed states of every game a party takes part in.

        Args:
            party: Player identity (as X or O)

        Returns:
            Current state of each game
        """
        pass

    @abstractmethod
    def count_games(self) -> int:
        """
        Count distinct games.

        Returns:
            Number of games recorded
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Cleanup and close connection."""
        pass

    def __enter__(self):
        """Context manager support."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager cleanup."""
        self.close()
