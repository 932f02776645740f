"""Unit tests for TransitionHook decisions."""

import pytest

from statepermit.application.hook import Abort, Proceed, RedirectTo, TransitionHook
from statepermit.domain.permission.model.outcome import (
    Authorized,
    DeniedByException,
    DeniedByMissingOnly,
)
from statepermit.domain.permission.model.redirect import RedirectTarget
from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.permission.service.authorization import StateAuthorization
from statepermit.domain.permission.service.builder import RuleSetBuilder
from statepermit.domain.permission.service.evaluator import AuthorizationEvaluator
from statepermit.domain.permission.service.redirect import RedirectResolver
from statepermit.domain.shared.error import NotFoundError
from statepermit.infrastructure.memory.permission_store import InMemoryPermissionStore
from statepermit.infrastructure.memory.state_registry import InMemoryStateRegistry


def make_hook(*granted: str) -> TransitionHook:
    registry = InMemoryStateRegistry()
    registry.register("root")
    registry.register(
        "root.section",
        {
            "only": ["admin"],
            "redirectTo": {
                "banned": {"state": "error.banned"},
                "default": {"state": "error.generic"},
            },
        },
    )
    registry.register("root.section.page", {"except": ["banned"]})
    registry.register("root.open")
    registry.register("root.locked", {"only": ["nobody"]})

    store = InMemoryPermissionStore()
    store.grant(*granted)

    authorization = StateAuthorization(
        _registry=registry,
        _builder=RuleSetBuilder(),
        _evaluator=AuthorizationEvaluator(_checker=store),
    )
    return TransitionHook(_authorization=authorization, _resolver=RedirectResolver())


class TestTransitionHook:
    @pytest.mark.asyncio
    async def test_allowed_transition_proceeds(self):
        decision = await make_hook("admin").on_start(Transition(to_state="root.section.page"))
        assert decision == Proceed(outcome=Authorized(granted=("admin",)))

    @pytest.mark.asyncio
    async def test_unrestricted_state_proceeds(self):
        decision = await make_hook().on_start(Transition(to_state="root.open"))
        assert isinstance(decision, Proceed)

    @pytest.mark.asyncio
    async def test_except_match_redirects_to_specific_target(self):
        hook = make_hook("admin", "banned")

        decision = await hook.on_start(Transition(to_state="root.section.page"))

        assert decision == RedirectTo(
            target=RedirectTarget(state="error.banned"),
            denial=DeniedByException(rule="banned"),
        )

    @pytest.mark.asyncio
    async def test_missing_only_redirects_to_default(self):
        decision = await make_hook().on_start(Transition(to_state="root.section.page"))

        assert isinstance(decision, RedirectTo)
        assert decision.target.state == "error.generic"
        assert decision.denial == DeniedByMissingOnly(rule="admin")

    @pytest.mark.asyncio
    async def test_denial_without_redirect_aborts(self):
        decision = await make_hook().on_start(Transition(to_state="root.locked"))
        assert decision == Abort(denial=DeniedByMissingOnly(rule="nobody"))

    @pytest.mark.asyncio
    async def test_unknown_state_raises(self):
        with pytest.raises(NotFoundError):
            await make_hook().on_start(Transition(to_state="root.nowhere"))
