"""StateAuthorization - authorize by rule set or by registered state name."""

from statepermit.domain.permission.model.outcome import Outcome
from statepermit.domain.permission.model.rule_set import PermissionRuleSet
from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.permission.port.state_registry import StateRegistry
from statepermit.domain.permission.service.builder import RuleSetBuilder
from statepermit.domain.permission.service.evaluator import AuthorizationEvaluator
from statepermit.domain.shared.error import NotFoundError
from statepermit.domain.shared.service import Service


class StateAuthorization(Service):
    """Inheritance-aware authorization of navigation states."""

    _registry: StateRegistry
    _builder: RuleSetBuilder
    _evaluator: AuthorizationEvaluator

    async def authorize_by_rule_set(
        self,
        rule_set: PermissionRuleSet,
        transition: Transition | None = None,
    ) -> Outcome:
        return await self._evaluator.authorize(rule_set, transition)

    def rule_set_for(
        self,
        state_name: str,
        transition: Transition | None = None,
    ) -> PermissionRuleSet:
        """Build the merged rule set of a registered state.

        Raises:
            NotFoundError: If the state is not registered.
        """
        if self._registry.get(state_name) is None:
            raise NotFoundError(f"State not found: {state_name}", code="state_not_found")
        return self._builder.build(self._registry.path(state_name), transition)

    async def authorize_by_state_name(
        self,
        state_name: str,
        transition: Transition | None = None,
    ) -> Outcome:
        """Authorize access to a registered state, e.g. to decide whether to show a link.

        Raises:
            NotFoundError: If the state is not registered.
        """
        if transition is None:
            transition = Transition(to_state=state_name)
        rule_set = self.rule_set_for(state_name, transition)
        return await self.authorize_by_rule_set(rule_set, transition)
