"""In-memory state tree implementing StateRegistry.

Mirrors ui-router conventions: dotted names imply the parent
(``app.admin`` is a child of ``app``) and a child without its own
``permissions`` inherits its parent's by reference.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from statepermit.domain.permission.model.declaration import PermissionDeclaration
from statepermit.domain.permission.model.state import StateDefinition
from statepermit.domain.permission.port.state_registry import StateRegistry
from statepermit.domain.shared.error import ConfigurationError, NotFoundError

logger = logging.getLogger(__name__)


class StateSpec(BaseModel):
    """One entry of a states file."""

    name: str = Field(min_length=1)
    parent: str | None = None
    permissions: dict[str, Any] | None = None


class StatesFile(BaseModel):
    """Top-level shape of a YAML states file."""

    states: list[StateSpec] = []

    @classmethod
    def load(cls, path: Path) -> StatesFile:
        data = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(data)


class InMemoryStateRegistry(StateRegistry):
    """Registry of states kept in a dict, registered parents first."""

    def __init__(self) -> None:
        self._states: dict[str, StateDefinition] = {}

    def register(
        self,
        name: str,
        permissions: Mapping[str, Any] | PermissionDeclaration | None = None,
        *,
        parent: str | None = None,
    ) -> StateDefinition:
        """Register a state.

        Raises:
            ConfigurationError: If the state exists or its parent is unknown.
        """
        if name in self._states:
            raise ConfigurationError(f"State already registered: {name}", code="duplicate_state")

        if parent is None and "." in name:
            parent = name.rsplit(".", 1)[0]
        if parent is not None and parent not in self._states:
            raise ConfigurationError(
                f"Parent state {parent} of {name} is not registered",
                code="unknown_parent",
            )

        if permissions is not None:
            state = StateDefinition.declare(name, permissions, parent=parent)
        elif parent is not None:
            # Inherited by reference, not declared here
            state = StateDefinition(
                name=name,
                parent=parent,
                permissions=self._states[parent].permissions,
                has_own_permissions=False,
            )
        else:
            state = StateDefinition(name=name)

        self._states[name] = state
        logger.debug("Registered state %s (parent=%s)", name, parent)
        return state

    def get(self, name: str) -> StateDefinition | None:
        return self._states.get(name)

    def path(self, name: str) -> list[StateDefinition]:
        state = self._states.get(name)
        if state is None:
            raise NotFoundError(f"State not found: {name}", code="state_not_found")

        chain = [state]
        while chain[-1].parent is not None:
            chain.append(self._states[chain[-1].parent])
        chain.reverse()
        return chain

    def names(self) -> list[str]:
        return list(self._states)

    @classmethod
    def from_states_file(cls, states_file: StatesFile) -> InMemoryStateRegistry:
        registry = cls()
        for spec in states_file.states:
            registry.register(spec.name, spec.permissions, parent=spec.parent)
        return registry
