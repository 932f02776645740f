"""Domain error hierarchy.

Errors carry an optional machine-readable ``code`` alongside the message.
Denied authorization is an outcome value, not an error.
"""


class DomainError(Exception):
    """Base for all statepermit domain errors."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class NotFoundError(DomainError):
    """A referenced state (or other entity) does not exist."""


class ConfigurationError(DomainError):
    """Invalid setup detected while registering states or wiring services."""


class MalformedDeclarationError(DomainError):
    """A state's permission declaration cannot be normalized.

    Raised by ``PermissionDeclaration.parse``; the rule-set builder recovers
    by skipping the offending state.
    """
