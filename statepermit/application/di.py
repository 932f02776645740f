from dishka import AsyncContainer, make_async_container

from statepermit.config import Config
from statepermit.domain.permission.port.checker import PermissionChecker
from statepermit.domain.permission.port.state_registry import StateRegistry
from statepermit.domain.permission.util.di import PermissionProvider
from statepermit.util.di.scope import Scope


def create_container(
    registry: StateRegistry,
    checker: PermissionChecker,
    config: Config | None = None,
) -> AsyncContainer:
    """Build the container; open one Scope.ATTEMPT per navigation attempt."""
    if config is None:
        # Pydantic Settings populates from env vars at runtime
        config = Config()  # type: ignore[call-arg]

    return make_async_container(
        PermissionProvider(),
        context={Config: config, StateRegistry: registry, PermissionChecker: checker},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
