"""StateDefinition - one node of a navigation state tree."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from statepermit.domain.permission.model.declaration import PermissionDeclaration


@dataclass(frozen=True)
class StateDefinition:
    """A navigation state as seen by the authorization engine.

    ``permissions`` may be inherited from the parent by reference, so
    ``has_own_permissions`` states explicitly whether this state declared them.
    Only states with their own declaration contribute to a rule set.
    """

    name: str
    parent: str | None = None
    permissions: Mapping[str, Any] | PermissionDeclaration | None = None
    has_own_permissions: bool = False

    @classmethod
    def declare(
        cls,
        name: str,
        permissions: Mapping[str, Any] | PermissionDeclaration | None = None,
        *,
        parent: str | None = None,
    ) -> StateDefinition:
        """Build a state whose permissions (if any) are its own."""
        return cls(
            name=name,
            parent=parent,
            permissions=permissions,
            has_own_permissions=permissions is not None,
        )
