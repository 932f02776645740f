"""RedirectResolver - turns a denied rule name into a redirect target."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from statepermit.domain.permission.model.declaration import DEFAULT_REDIRECT_KEY
from statepermit.domain.permission.model.redirect import RedirectTarget
from statepermit.domain.permission.model.rule_set import PermissionRuleSet, RedirectRule
from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.shared.service import Service

logger = logging.getLogger(__name__)


class RedirectResolver(Service):
    """Resolves redirect rules of a rule set.

    Lookup order: the denied rule name, then the default key. Nested
    mappings without a ``state`` key dispatch again with the same lookup.
    A missing entry is a normal outcome and resolves to None.
    """

    _default_key: str = DEFAULT_REDIRECT_KEY
    _max_depth: int = 4

    async def resolve(
        self,
        denied_rule: str,
        rule_set: PermissionRuleSet,
        transition: Transition | None = None,
    ) -> RedirectTarget | None:
        """Return the redirect target for ``denied_rule``, or None if there is none.

        Exceptions raised by user-supplied redirect functions propagate.
        """
        if not rule_set.redirect_to:
            logger.debug("No redirect rules defined for denied rule %s", denied_rule)
            return None

        target = await self._dispatch(rule_set.redirect_to, denied_rule, transition, depth=0)
        if target is None:
            logger.info("No redirect available for denied rule %s", denied_rule)
        else:
            logger.info("Redirecting denied rule %s to state %s", denied_rule, target.state)
        return target

    async def _dispatch(
        self,
        rules: Mapping[str, RedirectRule],
        denied_rule: str,
        transition: Transition | None,
        depth: int,
    ) -> RedirectTarget | None:
        rule = rules.get(denied_rule)
        if rule is None or rule == "":
            rule = rules.get(self._default_key)
        if rule is None or rule == "":
            return None
        return await self._normalize(rule, denied_rule, transition, depth)

    async def _normalize(
        self,
        rule: Any,
        denied_rule: str,
        transition: Transition | None,
        depth: int,
    ) -> RedirectTarget | None:
        if depth > self._max_depth:
            logger.warning(
                "Redirect rules for %s nested deeper than %d levels", denied_rule, self._max_depth
            )
            return None

        if isinstance(rule, RedirectTarget):
            return rule
        if isinstance(rule, str):
            return RedirectTarget(state=rule) if rule else None
        if isinstance(rule, Mapping):
            if "state" in rule:
                try:
                    return RedirectTarget.model_validate(dict(rule))
                except ValidationError as e:
                    logger.warning("Invalid redirect target for %s: %s", denied_rule, e)
                    return None
            return await self._dispatch(rule, denied_rule, transition, depth + 1)
        if callable(rule):
            result = rule(denied_rule, transition)
            if inspect.isawaitable(result):
                result = await result
            if result is None:
                return None
            return await self._normalize(result, denied_rule, transition, depth + 1)

        logger.warning(
            "Unsupported redirect rule for %s: %s", denied_rule, type(rule).__name__
        )
        return None
