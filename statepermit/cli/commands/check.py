"""Check command - decide a transition against a states file."""

import asyncio
import sys
from pathlib import Path

import cyclopts

from statepermit.application.di import create_container
from statepermit.application.hook import (
    Abort,
    Proceed,
    RedirectTo,
    TransitionDecision,
    TransitionHook,
)
from statepermit.cli.console import get_console
from statepermit.cli.states import load_registry
from statepermit.config import Config, configure_logging
from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.permission.port.checker import PermissionChecker
from statepermit.domain.permission.port.state_registry import StateRegistry
from statepermit.domain.shared.error import NotFoundError
from statepermit.infrastructure.memory.permission_store import InMemoryPermissionStore

app = cyclopts.App(name="check", help="Decide whether a transition is allowed")


async def authorize_transition(
    registry: StateRegistry,
    checker: PermissionChecker,
    transition: Transition,
    config: Config | None = None,
) -> TransitionDecision:
    """Run the transition hook for one attempt in its own DI scope."""
    container = create_container(registry, checker, config)
    try:
        async with container() as attempt:
            hook = await attempt.get(TransitionHook)
            return await hook.on_start(transition)
    finally:
        await container.close()


@app.default
def check(
    state: str,
    *,
    states: Path,
    grant: list[str] | None = None,
    from_state: str | None = None,
    verbose: bool = False,
) -> None:
    """Decide a transition to STATE for an actor holding the granted names.

    Args:
        state: Target state name.
        states: YAML file declaring the state tree.
        grant: Permission or role name the actor holds (repeatable).
        from_state: State the transition starts from.
        verbose: Log every permission check.
    """
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(logging_config)

    registry = load_registry(states)
    store = InMemoryPermissionStore()
    store.grant(*(grant or []))

    transition = Transition(to_state=state, from_state=from_state)
    try:
        decision = asyncio.run(authorize_transition(registry, store, transition, config))
    except NotFoundError as e:
        console.error(e.message, hint="Run 'statepermit explain' on a registered state.")
        sys.exit(1)

    if isinstance(decision, Proceed):
        granted = ", ".join(decision.outcome.granted) or "no restrictions"
        console.success(f"Allowed: {state} ({granted})")
        return

    if isinstance(decision, RedirectTo):
        console.warning(
            f"Denied by {decision.denial.rule}; redirect to {decision.target.state}"
        )
        if decision.target.params:
            console.info(f"params: {decision.target.params}")
    elif isinstance(decision, Abort):
        console.error(f"Denied by {decision.denial.rule}; no redirect available")
    sys.exit(1)
