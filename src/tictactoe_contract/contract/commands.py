"""
Commands that authorize a transition.

Closed set of variants, each tagged with a CommandKind:
- Create: start a new game
- Play: place one symbol at (row, col)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class CommandKind(str, Enum):
    CREATE = "create"
    PLAY = "play"


@dataclass(frozen=True)
class Create:
    """Issue a fresh, pristine game."""

    kind: CommandKind = field(default=CommandKind.CREATE, init=False)


@dataclass(frozen=True)
class Play:
    """Claim that the last move of the output state is (row, col, symbol)."""

    row: int
    col: int
    symbol: str
    kind: CommandKind = field(default=CommandKind.PLAY, init=False)


Command = Union[Create, Play]
