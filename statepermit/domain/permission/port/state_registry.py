"""Port for the navigation framework's state tree."""

from abc import abstractmethod
from typing import Protocol

from statepermit.domain.permission.model.state import StateDefinition
from statepermit.domain.shared.port import Port


class StateRegistry(Port, Protocol):
    """Read access to registered navigation states."""

    @abstractmethod
    def get(self, name: str) -> StateDefinition | None:
        """Get a state by name, or None if it is not registered."""
        ...

    @abstractmethod
    def path(self, name: str) -> list[StateDefinition]:
        """Ancestor chain of ``name``, root first and the state itself last.

        Raises:
            NotFoundError: If the state is not registered.
        """
        ...
