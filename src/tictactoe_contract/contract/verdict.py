"""Outcome of validating one transition."""

from dataclasses import dataclass
from typing import Union

from ..core.errors import RejectionKind, error_for


@dataclass(frozen=True)
class Accepted:
    """The transition follows the rules."""

    @property
    def accepted(self) -> bool:
        return True

    def raise_for_rejection(self) -> None:
        """Nothing to raise."""


@dataclass(frozen=True)
class Rejected:
    """
    The transition breaks a rule.

    kind tells malformed encodings (FORMAT) apart from wrong transaction
    shape (SHAPE) and rule breaks (RULE); message names the first failed check.
    """

    kind: RejectionKind
    message: str

    @property
    def accepted(self) -> bool:
        return False

    def to_error(self):
        """Exception equivalent of this rejection."""
        return error_for(self.kind, self.message)

    def raise_for_rejection(self) -> None:
        raise self.to_error()

    def __str__(self) -> str:
        return f"Rejected[{self.kind.value}]: {self.message}"


Verdict = Union[Accepted, Rejected]
