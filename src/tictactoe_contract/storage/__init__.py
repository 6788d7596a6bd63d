"""Storage backends for recorded game states."""

from .base import GameStore, LedgerQuery, StoredGame
from .sqlite import SQLiteGameStore

__all__ = ["GameStore", "LedgerQuery", "StoredGame", "SQLiteGameStore"]
