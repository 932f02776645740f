"""Transition - explicit context of one navigation attempt."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Transition:
    """Snapshot of the attempted navigation.

    Passed into declaration callables, permission validators and redirect
    callables in place of any process-wide holder.
    """

    to_state: str
    to_params: Mapping[str, Any] = field(default_factory=dict)
    from_state: str | None = None
    from_params: Mapping[str, Any] = field(default_factory=dict)
    options: Mapping[str, Any] = field(default_factory=dict)
