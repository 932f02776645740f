"""RuleSetBuilder - folds an ancestor chain into one PermissionRuleSet."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from statepermit.domain.permission.model.declaration import (
    DEFAULT_REDIRECT_KEY,
    PermissionDeclaration,
)
from statepermit.domain.permission.model.rule_set import PermissionRuleSet
from statepermit.domain.permission.model.state import StateDefinition
from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.shared.error import MalformedDeclarationError
from statepermit.domain.shared.service import Service

logger = logging.getLogger(__name__)


class RuleSetBuilder(Service):
    """Builds the rule set of a target state from its ancestors.

    Each ancestor that declares its own permissions contributes one ``only``
    group and one ``except`` group (when non-empty). Redirect rules are
    shallow-merged so deeper states override shallower ones key by key.
    """

    _default_redirect_key: str = DEFAULT_REDIRECT_KEY

    def build(
        self,
        chain: Sequence[StateDefinition],
        transition: Transition | None = None,
        base: PermissionRuleSet | None = None,
    ) -> PermissionRuleSet:
        """Fold ``chain`` (root first) on top of ``base`` into a new rule set."""
        rule_set = base if base is not None else PermissionRuleSet()

        for state in chain:
            declaration = self._own_declaration(state, transition)
            if declaration is None:
                continue
            rule_set = rule_set.extend(
                only=declaration.only,
                except_=declaration.except_,
                redirect_to=declaration.redirect_to,
            )

        logger.debug(
            "Built rule set: only=%s except=%s redirect_keys=%s",
            rule_set.only,
            rule_set.except_,
            sorted(rule_set.redirect_to or {}),
        )
        return rule_set

    def _own_declaration(
        self,
        state: Any,
        transition: Transition | None,
    ) -> PermissionDeclaration | None:
        """Return the state's own normalized declaration, or None to skip it."""
        try:
            if not state.has_own_permissions:
                return None
            return PermissionDeclaration.parse(
                state.permissions,
                transition,
                default_key=self._default_redirect_key,
            )
        except MalformedDeclarationError as e:
            logger.warning("Skipping permissions of state %s: %s", _label(state), e.message)
        except Exception as e:
            logger.warning(
                "Skipping permissions of state %s: declaration not inspectable (%s)",
                _label(state),
                e,
            )
        return None


def _label(state: Any) -> str:
    try:
        return str(state.name)
    except Exception:
        return object.__repr__(state)
