"""Port for the external permission-checking backend."""

from abc import abstractmethod
from typing import Protocol

from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.shared.port import Port


class PermissionChecker(Port, Protocol):
    """Decides whether the current actor holds a permission or role name."""

    @abstractmethod
    async def check(self, name: str, transition: Transition | None = None) -> bool:
        """Return True if the actor holds ``name``.

        Returning False and raising are both treated as "does not hold";
        the engine never retries.
        """
        ...
