from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform()
class _ServiceMeta(type):
    """Turns every Service subclass into a dataclass so dependencies are fields."""

    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            return dataclass(cls)
        return cls


class Service(metaclass=_ServiceMeta):
    """Base class for domain services.

    Collaborators are declared as underscore-prefixed fields and passed as
    keyword arguments, e.g. ``AuthorizationEvaluator(_checker=store)``.
    """
