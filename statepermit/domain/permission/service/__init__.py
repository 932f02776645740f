"""Permission domain services."""

from .authorization import StateAuthorization
from .builder import RuleSetBuilder
from .evaluator import AuthorizationEvaluator
from .race import Race, first_match, race
from .redirect import RedirectResolver

__all__ = [
    "AuthorizationEvaluator",
    "Race",
    "RedirectResolver",
    "RuleSetBuilder",
    "StateAuthorization",
    "first_match",
    "race",
]
