"""
Rich-based console output for the CLI.

Provides:
- Board rendering as a grid
- Move history tables
- Verdict lines
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..contract.verdict import Verdict
from ..core.board import BOARD_SIZE, Board, MoveLog
from ..core.game_state import GameState
from ..storage.base import StoredGame

console = Console()
logger = logging.getLogger(__name__)

_SYMBOL_STYLES = {"X": "bold cyan", "O": "bold magenta"}


class GameDisplay:
    """
    Rich display for games and verdicts.
    """

    def __init__(self, output: Optional[Console] = None):
        """
        Initialize display.

        Args:
            output: Console to print to (defaults to the module console)
        """
        self.console = output or console

    def log_info(self, message: str):
        """Log info message."""
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def log_success(self, message: str):
        """Log success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def log_warning(self, message: str):
        """Log warning message."""
        self.console.print(f"[yellow]⚠[/yellow]  {message}")

    def log_error(self, message: str):
        """Log error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def board_table(self, board: Board) -> Table:
        """Create a 3x3 grid table."""
        table = Table(show_header=False, show_lines=True, padding=(0, 1))
        for _ in range(BOARD_SIZE):
            table.add_column(justify="center", width=3)

        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                cell = board.get(row, col)
                style = _SYMBOL_STYLES.get(cell.value)
                cells.append(f"[{style}]{cell.value}[/{style}]" if style else " ")
            table.add_row(*cells)

        return table

    def moves_table(self, moves: MoveLog) -> Table:
        """Create a move history table."""
        table = Table(title="Moves", box=None, padding=(0, 1))
        table.add_column("#", style="dim", justify="right")
        table.add_column("Symbol")
        table.add_column("Row", justify="right")
        table.add_column("Col", justify="right")

        for index, move in enumerate(moves, start=1):
            style = _SYMBOL_STYLES.get(move.symbol.value, "")
            table.add_row(str(index), f"[{style}]{move.symbol.value}[/{style}]", str(move.row), str(move.col))

        return table

    def show_game(self, game: GameState, board: Board, moves: MoveLog):
        """Show a game's board and move history."""
        title = f"[bold]{game.linear_id}[/bold]"
        subtitle = f"X: {game.player_x} | O: {game.player_o}"
        self.console.print(Panel(self.board_table(board), title=title, subtitle=subtitle, expand=False))
        if moves:
            self.console.print(self.moves_table(moves))

    def show_history(self, history: List[StoredGame]):
        """Show every recorded state of a game."""
        table = Table(title="History", padding=(0, 1))
        table.add_column("Seq", justify="right")
        table.add_column("Board")
        table.add_column("Moves")
        table.add_column("Consumed")

        for stored in history:
            consumed = "[dim]yes[/dim]" if stored.consumed else "[green]no[/green]"
            table.add_row(str(stored.seq), stored.state.board, stored.state.moves or "-", consumed)

        self.console.print(table)

    def show_verdict(self, verdict: Verdict, label: str = "Transition"):
        """Show a validator verdict."""
        if verdict.accepted:
            self.log_success(f"{label}: accepted")
        else:
            self.log_error(f"{label}: rejected [{verdict.kind.value}] {verdict.message}")


def setup_rich_logging(level: str = "INFO"):
    """Configure logging to work nicely with rich console."""
    from rich.logging import RichHandler

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )
