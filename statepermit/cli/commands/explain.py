"""Explain command - show the merged rule set of a state."""

import asyncio
import sys
from pathlib import Path

import cyclopts

from statepermit.application.di import create_container
from statepermit.cli.console import get_console
from statepermit.cli.states import load_registry
from statepermit.domain.permission.model.rule_set import PermissionRuleSet
from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.permission.port.state_registry import StateRegistry
from statepermit.domain.permission.service.authorization import StateAuthorization
from statepermit.domain.shared.error import NotFoundError
from statepermit.infrastructure.memory.permission_store import InMemoryPermissionStore

app = cyclopts.App(name="explain", help="Show the merged rule set of a state")


async def merged_rule_set(registry: StateRegistry, state: str) -> PermissionRuleSet:
    container = create_container(registry, InMemoryPermissionStore())
    try:
        async with container() as attempt:
            authorization = await attempt.get(StateAuthorization)
            return authorization.rule_set_for(state, Transition(to_state=state))
    finally:
        await container.close()


@app.default
def explain(state: str, *, states: Path) -> None:
    """Print the only/except groups and redirect keys inherited by STATE.

    Args:
        state: State name.
        states: YAML file declaring the state tree.
    """
    console = get_console()
    registry = load_registry(states)

    try:
        rule_set = asyncio.run(merged_rule_set(registry, state))
    except NotFoundError as e:
        console.error(e.message)
        sys.exit(1)

    path = " > ".join(s.name for s in registry.path(state))
    console.print(f"[bold]{state}[/bold] [dim]({path})[/dim]")

    if rule_set.is_unrestricted:
        console.info("No permission rules apply")
    rows = [{"phase": "except", "names": " | ".join(g)} for g in rule_set.except_]
    rows += [{"phase": "only", "names": " | ".join(g)} for g in rule_set.only]
    if rows:
        console.table(rows, [("phase", "Phase"), ("names", "Any of")], title="Rule groups")

    if rule_set.redirect_to:
        console.print("Redirect rules: " + ", ".join(sorted(rule_set.redirect_to)))
