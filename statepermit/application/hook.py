"""TransitionHook - runs authorization once per navigation attempt."""

import logging
from dataclasses import dataclass
from typing import Union

import logfire

from statepermit.domain.permission.model.outcome import Authorized, Denied
from statepermit.domain.permission.model.redirect import RedirectTarget
from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.permission.service.authorization import StateAuthorization
from statepermit.domain.permission.service.redirect import RedirectResolver
from statepermit.domain.shared.service import Service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Proceed:
    """Navigation continues to the requested state."""

    outcome: Authorized


@dataclass(frozen=True)
class RedirectTo:
    """Navigation is redirected because of ``denial``."""

    target: RedirectTarget
    denial: Denied


@dataclass(frozen=True)
class Abort:
    """Navigation is cancelled; no redirect was available for ``denial``."""

    denial: Denied


TransitionDecision = Union[Proceed, RedirectTo, Abort]


class TransitionHook(Service):
    """Navigation integration invoked at the start of every transition.

    Builds the target's rule set from its ancestors, evaluates it and, on
    denial, resolves the redirect. The host router applies the decision.
    """

    _authorization: StateAuthorization
    _resolver: RedirectResolver

    async def on_start(self, transition: Transition) -> TransitionDecision:
        """Decide what to do with ``transition``.

        Raises:
            NotFoundError: If the target state is not registered.
        """
        with logfire.span(
            "AuthorizeTransition",
            to_state=transition.to_state,
            from_state=transition.from_state,
        ):
            rule_set = self._authorization.rule_set_for(transition.to_state, transition)
            outcome = await self._authorization.authorize_by_rule_set(rule_set, transition)

            if isinstance(outcome, Authorized):
                return Proceed(outcome=outcome)

            target = await self._resolver.resolve(outcome.rule, rule_set, transition)
            if target is None:
                logger.info(
                    "Transition to %s aborted: denied by %s, no redirect",
                    transition.to_state,
                    outcome.rule,
                )
                return Abort(denial=outcome)

            logger.info(
                "Transition to %s redirected to %s (denied by %s)",
                transition.to_state,
                target.state,
                outcome.rule,
            )
            return RedirectTo(target=target, denial=outcome)
