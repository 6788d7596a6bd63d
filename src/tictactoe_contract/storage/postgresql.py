"""PostgreSQL game store for shared deployments."""

import logging
from typing import List, Optional

import psycopg2
import psycopg2.extras

from ..core.game_state import GameState
from .base import GameStore, StoredGame

logger = logging.getLogger(__name__)


class PostgreSQLGameStore(GameStore):
    """
    PostgreSQL storage implementation.

    Same schema as the SQLite store; rows are read through RealDictCursor.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        database: str = "tictactoe",
        user: str = "postgres",
        password: str = "",
    ):
        """
        Initialize PostgreSQL store.

        Args:
            host: Database host
            port: Database port
            database: Database name
            user: Database user
            password: Database password
        """
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password

        self.conn = psycopg2.connect(
            host=host,
            port=port,
            database=database,
            user=user,
            password=password,
        )
        self.conn.autocommit = False  # Manual transaction control
        self._create_schema()

    def _create_schema(self) -> None:
        """Create database schema."""
        with self.conn.cursor() as cursor:
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS tictactoe_states (
                    linear_id TEXT NOT NULL,
                    seq SMALLINT NOT NULL,
                    player_x TEXT NOT NULL,
                    player_o TEXT NOT NULL,
                    board TEXT NOT NULL,
                    moves TEXT NOT NULL,
                    consumed BOOLEAN NOT NULL DEFAULT FALSE,
                    PRIMARY KEY (linear_id, seq)
                );

                CREATE INDEX IF NOT EXISTS idx_player_x ON tictactoe_states(player_x);
                CREATE INDEX IF NOT EXISTS idx_player_o ON tictactoe_states(player_o);
            """
            )
            self.conn.commit()

    @staticmethod
    def _row_to_stored(row) -> StoredGame:
        return StoredGame(
            state=GameState(
                player_x=row["player_x"],
                player_o=row["player_o"],
                board=row["board"],
                moves=row["moves"],
                linear_id=row["linear_id"],
            ),
            seq=row["seq"],
            consumed=row["consumed"],
        )

    def _current(self, cursor, linear_id: str, lock: bool = False) -> Optional[StoredGame]:
        query = """
            SELECT * FROM tictactoe_states
            WHERE linear_id = %s AND NOT consumed
            ORDER BY seq DESC
            LIMIT 1
        """
        if lock:
            query += " FOR UPDATE"
        cursor.execute(query, (linear_id,))
        row = cursor.fetchone()
        return self._row_to_stored(row) if row else None

    def latest_unconsumed(self, linear_id: str) -> Optional[GameState]:
        """Most recent unconsumed state."""
        with self.conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cursor:
            current = self._current(cursor, linear_id)
        self.conn.commit()
        return current.state if current else None

    def record(self, output: GameState, consumed: Optional[GameState] = None) -> StoredGame:
        """Record output, consuming the previous state."""
        try:
            with self.conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cursor:
                current = self._current(cursor, output.linear_id, lock=True)

                if consumed is None:
                    if current is not None:
                        raise ValueError(f"Game {output.linear_id} already exists")
                    seq = 0
                else:
                    if current is None or current.state != consumed:
                        raise ValueError(
                            f"Input state is not the current state of game {consumed.linear_id}"
                        )
                    cursor.execute(
                        "UPDATE tictactoe_states SET consumed = TRUE WHERE linear_id = %s AND seq = %s",
                        (current.state.linear_id, current.seq),
                    )
                    seq = current.seq + 1

                cursor.execute(
                    """
                    INSERT INTO tictactoe_states (linear_id, seq, player_x, player_o, board, moves)
                    VALUES (%s, %s, %s, %s, %s, %s)
                """,
                    (output.linear_id, seq, output.player_x, output.player_o, output.board, output.moves),
                )
            self.conn.commit()
        except (ValueError, psycopg2.Error):
            self.conn.rollback()
            raise

        logger.debug(f"Recorded {output.linear_id} seq={seq}")
        return StoredGame(state=output, seq=seq)

    def history(self, linear_id: str) -> List[StoredGame]:
        """All states of a game, oldest first."""
        with self.conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cursor:
            cursor.execute(
                "SELECT * FROM tictactoe_states WHERE linear_id = %s ORDER BY seq",
                (linear_id,),
            )
            rows = cursor.fetchall()
        self.conn.commit()
        return [self._row_to_stored(row) for row in rows]

    def games_for_player(self, party: str) -> List[GameState]:
        """Current states of a party's games."""
        with self.conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cursor:
            cursor.execute(
                """
                SELECT * FROM tictactoe_states
                WHERE NOT consumed AND (player_x = %s OR player_o = %s)
                ORDER BY linear_id
                """,
                (party, party),
            )
            rows = cursor.fetchall()
        self.conn.commit()
        return [self._row_to_stored(row).state for row in rows]

    def count_games(self) -> int:
        """Count games."""
        with self.conn.cursor() as cursor:
            cursor.execute("SELECT COUNT(DISTINCT linear_id) FROM tictactoe_states")
            count = cursor.fetchone()[0]
        self.conn.commit()
        return count

    def close(self) -> None:
        """Close database connection."""
        self.conn.commit()
        self.conn.close()
