"""
Error taxonomy for transition validation.

Three tiers:
- FormatError: a board or move-log string is malformed
- ShapeError: wrong number of commands, inputs, outputs or references
- RuleViolation: a well-formed transition that breaks a game rule
"""

from enum import Enum
from typing import Optional


class RejectionKind(str, Enum):
    """Which tier a rejection belongs to."""

    FORMAT = "format"
    SHAPE = "shape"
    RULE = "rule"


class ContractError(ValueError):
    """Base class for every error raised while checking a transition."""

    kind: RejectionKind = RejectionKind.RULE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormatError(ContractError):
    """Malformed board or move-log encoding."""

    kind = RejectionKind.FORMAT


class ShapeError(ContractError):
    """Wrong count of commands, input states, output states or references."""

    kind = RejectionKind.SHAPE


class RuleViolation(ContractError):
    """Semantically invalid transition."""

    kind = RejectionKind.RULE

    OUT_OF_BOUNDS = "out_of_bounds"

    def __init__(self, message: str, rule: Optional[str] = None):
        super().__init__(message)
        self.rule = rule


def error_for(kind: RejectionKind, message: str) -> ContractError:
    """Build the exception matching a rejection kind."""
    if kind == RejectionKind.FORMAT:
        return FormatError(message)
    if kind == RejectionKind.SHAPE:
        return ShapeError(message)
    return RuleViolation(message)
