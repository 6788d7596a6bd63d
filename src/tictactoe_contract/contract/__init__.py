"""Transition contract: commands, verdicts and the validator."""

from .commands import Command, CommandKind, Create, Play
from .validator import Transition, validate, verify_transition
from .verdict import Accepted, Rejected, Verdict

__all__ = [
    "Command",
    "CommandKind",
    "Create",
    "Play",
    "Transition",
    "validate",
    "verify_transition",
    "Accepted",
    "Rejected",
    "Verdict",
]
