"""AuthorizationEvaluator - two-phase asynchronous evaluation of a rule set.

Phase one probes every ``except`` group concurrently; the first group with a
matching name denies the attempt. Phase two starts only after phase one has
settled and probes every ``only`` group concurrently; the first group proven
to have no matching name denies the attempt, otherwise it is authorized.
"""

from __future__ import annotations

import asyncio
import logging

import logfire

from statepermit.domain.permission.model.outcome import (
    Authorized,
    DeniedByException,
    DeniedByMissingOnly,
    Outcome,
)
from statepermit.domain.permission.model.rule_set import PermissionRuleSet, RuleGroup
from statepermit.domain.permission.model.transition import Transition
from statepermit.domain.permission.port.checker import PermissionChecker
from statepermit.domain.permission.service.race import first_match, race
from statepermit.domain.shared.service import Service

logger = logging.getLogger(__name__)


class AuthorizationEvaluator(Service):
    """Evaluates a PermissionRuleSet against a PermissionChecker backend."""

    _checker: PermissionChecker
    _check_timeout: float | None = None

    async def authorize(
        self,
        rule_set: PermissionRuleSet,
        transition: Transition | None = None,
    ) -> Outcome:
        """Decide whether the actor satisfies ``rule_set``.

        Never raises for a denial; backend failures count as non-matching.
        """
        with logfire.span(
            "AuthorizeRuleSet",
            only_groups=len(rule_set.only),
            except_groups=len(rule_set.except_),
        ):
            matched_exception = await self._match_any_group(rule_set.except_, transition)
            if matched_exception is not None:
                logger.info("Authorization denied by except rule: %s", matched_exception)
                return DeniedByException(rule=matched_exception)

            if not rule_set.only:
                logger.debug("Authorization allowed: no only rules")
                return Authorized()

            return await self._match_every_group(rule_set.only, transition)

    async def _match_any_group(
        self,
        groups: tuple[RuleGroup, ...],
        transition: Transition | None,
    ) -> str | None:
        """Name matched by the first group that matches at all, else None."""
        if not groups:
            return None

        outcome = await race(
            [self._match_group(group, transition) for group in groups],
            decisive=lambda matched: matched is not None,
        )
        return outcome.value

    async def _match_every_group(
        self,
        groups: tuple[RuleGroup, ...],
        transition: Transition | None,
    ) -> Outcome:
        outcome = await race(
            [self._match_group(group, transition) for group in groups],
            decisive=lambda matched: matched is None,
        )

        if outcome.winner is not None:
            rejected = groups[outcome.winner][0]
            logger.info("Authorization denied: no match for only group %s", groups[outcome.winner])
            return DeniedByMissingOnly(rule=rejected)

        granted = tuple(name for name in outcome.results if name is not None)
        logger.info("Authorization allowed: granted=%s", granted)
        return Authorized(granted=granted)

    async def _match_group(
        self,
        group: RuleGroup,
        transition: Transition | None,
    ) -> str | None:
        async def probe(name: str) -> bool:
            return await self._check(name, transition)

        return await first_match(group, probe)

    async def _check(self, name: str, transition: Transition | None) -> bool:
        """Ask the backend about one name; any failure means "no match"."""
        try:
            if self._check_timeout is None:
                result = await self._checker.check(name, transition)
            else:
                result = await asyncio.wait_for(
                    self._checker.check(name, transition),
                    timeout=self._check_timeout,
                )
        except asyncio.TimeoutError:
            logger.warning("Permission check timed out: %s", name)
            return False
        except Exception as e:
            logger.warning("Permission check failed for %s: %s", name, e)
            return False

        logger.debug("Permission check %s -> %s", name, bool(result))
        return bool(result)
