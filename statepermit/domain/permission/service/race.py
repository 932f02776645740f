"""Concurrent disjunction primitives.

``race`` runs awaitables concurrently and stops at the first result that
decides the question. Losing tasks are cancelled and awaited, so a slow
task can never change a decision that has already been made.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Race(Generic[T]):
    """Result of a race.

    ``winner`` is the index of the first decisive awaitable, or None when
    every awaitable settled without deciding. ``results`` holds the settled
    values in input order; entries of cancelled tasks are None.
    """

    winner: int | None
    results: list[T | None] = field(default_factory=list)

    @property
    def decided(self) -> bool:
        return self.winner is not None

    @property
    def value(self) -> T | None:
        """Value of the winning awaitable, if any."""
        return self.results[self.winner] if self.winner is not None else None


async def race(
    awaitables: Sequence[Awaitable[T]],
    decisive: Callable[[T], bool],
) -> Race[T]:
    """Run ``awaitables`` concurrently until one produces a decisive result.

    Tasks completing in the same loop iteration are inspected in input
    order. Exceptions raised by an awaitable propagate after the remaining
    tasks are cancelled.
    """
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    position = {task: i for i, task in enumerate(tasks)}
    results: list[T | None] = [None] * len(tasks)
    pending = set(tasks)

    try:
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            for task in sorted(done, key=position.__getitem__):
                i = position[task]
                results[i] = task.result()
                if decisive(results[i]):
                    return Race(winner=i, results=results)
        return Race(winner=None, results=results)
    finally:
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)


async def first_match(
    names: Sequence[str],
    probe: Callable[[str], Awaitable[bool]],
) -> str | None:
    """Return the first name whose probe succeeds, or None if all fail.

    An empty ``names`` sequence never matches.
    """
    if not names:
        return None
    outcome = await race([probe(name) for name in names], decisive=bool)
    return names[outcome.winner] if outcome.winner is not None else None
