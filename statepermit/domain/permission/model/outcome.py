"""Authorization outcomes.

Denial is an expected result of an attempt, so it is modelled as a value.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Authorized:
    """The transition may proceed.

    ``granted`` holds the name that satisfied each ``only`` group, in group
    order. It is empty when the rule set had no ``only`` groups.
    """

    granted: tuple[str, ...] = ()

    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True)
class Denied:
    """The transition is not allowed; ``rule`` is the name that decided it."""

    rule: str

    @property
    def allowed(self) -> bool:
        return False


@dataclass(frozen=True)
class DeniedByException(Denied):
    """An ``except`` rule matched the actor."""


@dataclass(frozen=True)
class DeniedByMissingOnly(Denied):
    """An ``only`` group had no matching name; ``rule`` is its first name."""


Outcome = Union[Authorized, Denied]
