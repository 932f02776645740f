"""In-memory permission and role store implementing PermissionChecker."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Union

from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.permission.port.checker import PermissionChecker
from statepermit.domain.shared.error import ConfigurationError

logger = logging.getLogger(__name__)

Validator = Callable[[str, Union[Transition, None]], Union[bool, Awaitable[bool]]]


async def _run_validator(validator: Validator, name: str, transition: Transition | None) -> bool:
    result = validator(name, transition)
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


class InMemoryPermissionStore(PermissionChecker):
    """Permissions and roles defined by validator functions.

    A role is either a validator of its own or a list of permission names,
    all of which must pass. ``check`` looks up roles first, then permissions.
    Unknown names never match.
    """

    def __init__(self) -> None:
        self._permissions: dict[str, Validator] = {}
        self._roles: dict[str, Validator | tuple[str, ...]] = {}

    def define_permission(self, name: str, validator: Validator) -> None:
        self._permissions[name] = validator

    def define_many_permissions(self, names: Iterable[str], validator: Validator) -> None:
        for name in names:
            self.define_permission(name, validator)

    def define_role(self, name: str, rule: Validator | Iterable[str]) -> None:
        """Define a role by validator or by the permission names it requires."""
        if callable(rule):
            self._roles[name] = rule
            return
        if isinstance(rule, str):
            raise ConfigurationError(
                f"Role {name} must list permission names, not a single string",
                code="invalid_role",
            )
        self._roles[name] = tuple(rule)

    def grant(self, *names: str) -> None:
        """Define each name as a permission that always passes."""
        self.define_many_permissions(names, lambda _name, _transition: True)

    def remove_permission(self, name: str) -> None:
        self._permissions.pop(name, None)

    def remove_role(self, name: str) -> None:
        self._roles.pop(name, None)

    def clear(self) -> None:
        self._permissions.clear()
        self._roles.clear()

    def has_permission(self, name: str) -> bool:
        return name in self._permissions

    def has_role(self, name: str) -> bool:
        return name in self._roles

    async def check(self, name: str, transition: Transition | None = None) -> bool:
        if name in self._roles:
            return await self._check_role(name, transition)
        if name in self._permissions:
            return await _run_validator(self._permissions[name], name, transition)

        logger.debug("No role or permission defined for %s", name)
        return False

    async def _check_role(self, name: str, transition: Transition | None) -> bool:
        rule: Any = self._roles[name]
        if callable(rule):
            return await _run_validator(rule, name, transition)
        if not rule:
            return False

        results = await asyncio.gather(
            *(self._check_permission(p, transition) for p in rule),
        )
        return all(results)

    async def _check_permission(self, name: str, transition: Transition | None) -> bool:
        validator = self._permissions.get(name)
        if validator is None:
            return False
        return await _run_validator(validator, name, transition)
