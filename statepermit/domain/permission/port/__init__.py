from .checker import PermissionChecker
from .state_registry import StateRegistry

__all__ = ["PermissionChecker", "StateRegistry"]
