"""Create/Play orchestration over an injected game store."""

from .base import FlowError
from .create_game import CreateGameFlow
from .play_game import PlayGameFlow

__all__ = ["FlowError", "CreateGameFlow", "PlayGameFlow"]
