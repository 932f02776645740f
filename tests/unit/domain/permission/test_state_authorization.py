"""Unit tests for StateAuthorization."""

from unittest.mock import AsyncMock

import pytest

from statepermit.domain.permission.model.outcome import Authorized, DeniedByMissingOnly
from statepermit.domain.permission.model.rule_set import PermissionRuleSet
from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.permission.service.authorization import StateAuthorization
from statepermit.domain.permission.service.builder import RuleSetBuilder
from statepermit.domain.permission.service.evaluator import AuthorizationEvaluator
from statepermit.domain.shared.error import NotFoundError
from statepermit.infrastructure.memory.permission_store import InMemoryPermissionStore
from statepermit.infrastructure.memory.state_registry import InMemoryStateRegistry


def make_registry() -> InMemoryStateRegistry:
    registry = InMemoryStateRegistry()
    registry.register("app")
    registry.register("app.admin", {"only": ["admin"], "redirectTo": "login"})
    registry.register("app.admin.users", {"only": ["users:manage", "superuser"]})
    return registry


def make_authorization(
    registry: InMemoryStateRegistry,
    store: InMemoryPermissionStore,
) -> StateAuthorization:
    return StateAuthorization(
        _registry=registry,
        _builder=RuleSetBuilder(),
        _evaluator=AuthorizationEvaluator(_checker=store),
    )


class TestStateAuthorization:
    def test_rule_set_for_merges_ancestors(self):
        authorization = make_authorization(make_registry(), InMemoryPermissionStore())

        rule_set = authorization.rule_set_for("app.admin.users")

        assert rule_set.only == (("admin",), ("users:manage", "superuser"))
        assert dict(rule_set.redirect_to) == {"default": "login"}

    def test_rule_set_for_unknown_state(self):
        authorization = make_authorization(make_registry(), InMemoryPermissionStore())
        with pytest.raises(NotFoundError, match="app.missing"):
            authorization.rule_set_for("app.missing")

    @pytest.mark.asyncio
    async def test_authorize_by_state_name(self):
        store = InMemoryPermissionStore()
        store.grant("admin", "superuser")
        authorization = make_authorization(make_registry(), store)

        outcome = await authorization.authorize_by_state_name("app.admin.users")

        assert outcome == Authorized(granted=("admin", "superuser"))

    @pytest.mark.asyncio
    async def test_authorize_by_state_name_denied(self):
        store = InMemoryPermissionStore()
        store.grant("admin")
        authorization = make_authorization(make_registry(), store)

        outcome = await authorization.authorize_by_state_name("app.admin.users")

        assert outcome == DeniedByMissingOnly(rule="users:manage")

    @pytest.mark.asyncio
    async def test_authorize_by_state_name_builds_default_transition(self):
        checker = AsyncMock()
        checker.check = AsyncMock(return_value=True)
        authorization = StateAuthorization(
            _registry=make_registry(),
            _builder=RuleSetBuilder(),
            _evaluator=AuthorizationEvaluator(_checker=checker),
        )

        await authorization.authorize_by_state_name("app.admin")

        checker.check.assert_awaited_once_with("admin", Transition(to_state="app.admin"))

    @pytest.mark.asyncio
    async def test_authorize_by_rule_set_delegates_to_evaluator(self):
        evaluator = AsyncMock()
        evaluator.authorize = AsyncMock(return_value=Authorized())
        authorization = StateAuthorization(
            _registry=make_registry(), _builder=RuleSetBuilder(), _evaluator=evaluator
        )
        rule_set = PermissionRuleSet(only=[["admin"]])

        outcome = await authorization.authorize_by_rule_set(rule_set)

        assert outcome == Authorized()
        evaluator.authorize.assert_awaited_once_with(rule_set, None)
