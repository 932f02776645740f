"""Permission domain models."""

from .declaration import DEFAULT_REDIRECT_KEY, PermissionDeclaration
from .outcome import Authorized, Denied, DeniedByException, DeniedByMissingOnly, Outcome
from .redirect import RedirectTarget
from .rule_set import PermissionRuleSet, RedirectRule, RuleGroup
from .state import StateDefinition
from .transition import Transition

__all__ = [
    "DEFAULT_REDIRECT_KEY",
    "Authorized",
    "Denied",
    "DeniedByException",
    "DeniedByMissingOnly",
    "Outcome",
    "PermissionDeclaration",
    "PermissionRuleSet",
    "RedirectRule",
    "RedirectTarget",
    "RuleGroup",
    "StateDefinition",
    "Transition",
]
