"""RedirectTarget - where a denied transition is sent instead."""

from typing import Any

from pydantic import Field

from statepermit.domain.shared.model.value import ValueObject


class RedirectTarget(ValueObject):
    """Concrete navigation target: state name plus params and options."""

    state: str = Field(min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)
    options: dict[str, Any] = Field(default_factory=dict)
