"""Custom Dishka scopes for statepermit."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """statepermit dependency injection scopes.

    Hierarchy: APP -> ATTEMPT

    - APP: Application lifetime (config, state registry, permission backend)
    - ATTEMPT: One navigation attempt (rule set, evaluator, resolver, hook)
    """

    APP = new_scope("APP")
    ATTEMPT = new_scope("ATTEMPT")
