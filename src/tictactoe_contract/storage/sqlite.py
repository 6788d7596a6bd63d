"""SQLite game store for local development and tests."""

import sqlite3
import logging
from typing import List, Optional

from ..core.game_state import GameState
from .base import GameStore, StoredGame

logger = logging.getLogger(__name__)


class SQLiteGameStore(GameStore):
    """
    SQLite storage implementation.

    Optimized for:
    - Lookup of the current state by game identifier
    - Lookup of games by player identity
    """

    def __init__(self, db_path: str = ":memory:", create_schema: bool = True):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to database file (use ":memory:" for in-memory)
            create_schema: If False, skip schema creation
        """
        self.db_path = db_path
        self.conn = sqlite3.connect(db_path, check_same_thread=False, timeout=30.0)
        self.conn.row_factory = sqlite3.Row  # Enable dict-like access
        if create_schema:
            self._create_schema()
        self._optimize()

    def _create_schema(self) -> None:
        """Create database schema."""
        self.conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS tictactoe_states (
                linear_id TEXT NOT NULL,           -- game identifier (uuid)
                seq INTEGER NOT NULL,              -- 0 for the created state
                player_x TEXT NOT NULL,
                player_o TEXT NOT NULL,
                board TEXT NOT NULL,               -- serialized board
                moves TEXT NOT NULL,               -- serialized move log
                consumed INTEGER NOT NULL DEFAULT 0,
                PRIMARY KEY (linear_id, seq)
            );

            CREATE INDEX IF NOT EXISTS idx_linear_id ON tictactoe_states(linear_id);
            CREATE INDEX IF NOT EXISTS idx_player_x ON tictactoe_states(player_x);
            CREATE INDEX IF NOT EXISTS idx_player_o ON tictactoe_states(player_o);
        """
        )
        self.conn.commit()

    def _optimize(self) -> None:
        """Apply SQLite pragmas."""
        if self.db_path == ":memory:":
            return
        self.conn.executescript(
            """
            PRAGMA journal_mode = WAL;           -- Write-Ahead Logging
            PRAGMA synchronous = NORMAL;         -- Balanced durability
        """
        )
        logger.debug(f"SQLite store at {self.db_path} (WAL)")

    @staticmethod
    def _row_to_stored(row: sqlite3.Row) -> StoredGame:
        return StoredGame(
            state=GameState(
                player_x=row["player_x"],
                player_o=row["player_o"],
                board=row["board"],
                moves=row["moves"],
                linear_id=row["linear_id"],
            ),
            seq=row["seq"],
            consumed=bool(row["consumed"]),
        )

    def _current(self, linear_id: str) -> Optional[StoredGame]:
        cursor = self.conn.execute(
            """
            SELECT * FROM tictactoe_states
            WHERE linear_id = ? AND consumed = 0
            ORDER BY seq DESC
            LIMIT 1
            """,
            (linear_id,),
        )
        row = cursor.fetchone()
        return self._row_to_stored(row) if row else None

    def latest_unconsumed(self, linear_id: str) -> Optional[GameState]:
        """Most recent unconsumed state."""
        current = self._current(linear_id)
        return current.state if current else None

    def record(self, output: GameState, consumed: Optional[GameState] = None) -> StoredGame:
        """Record output, consuming the previous state."""
        current = self._current(output.linear_id)

        if consumed is None:
            if current is not None:
                raise ValueError(f"Game {output.linear_id} already exists")
            seq = 0
        else:
            if current is None or current.state != consumed:
                raise ValueError(
                    f"Input state is not the current state of game {consumed.linear_id}"
                )
            seq = current.seq + 1

        try:
            if consumed is not None:
                self.conn.execute(
                    "UPDATE tictactoe_states SET consumed = 1 WHERE linear_id = ? AND seq = ?",
                    (current.state.linear_id, current.seq),
                )
            self.conn.execute(
                """
                INSERT INTO tictactoe_states (linear_id, seq, player_x, player_o, board, moves)
                VALUES (?, ?, ?, ?, ?, ?)
            """,
                (output.linear_id, seq, output.player_x, output.player_o, output.board, output.moves),
            )
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise

        logger.debug(f"Recorded {output.linear_id} seq={seq}")
        return StoredGame(state=output, seq=seq)

    def history(self, linear_id: str) -> List[StoredGame]:
        """All states of a game, oldest first."""
        cursor = self.conn.execute(
            "SELECT * FROM tictactoe_states WHERE linear_id = ? ORDER BY seq",
            (linear_id,),
        )
        return [self._row_to_stored(row) for row in cursor]

    def games_for_player(self, party: str) -> List[GameState]:
        """Current states of a party's games."""
        cursor = self.conn.execute(
            """
            SELECT * FROM tictactoe_states
            WHERE consumed = 0 AND (player_x = ? OR player_o = ?)
            ORDER BY linear_id
            """,
            (party, party),
        )
        return [self._row_to_stored(row).state for row in cursor]

    def count_games(self) -> int:
        """Count games."""
        cursor = self.conn.execute("SELECT COUNT(DISTINCT linear_id) FROM tictactoe_states")
        return cursor.fetchone()[0]

    def close(self) -> None:
        """Close database connection."""
        self.conn.commit()
        self.conn.close()
