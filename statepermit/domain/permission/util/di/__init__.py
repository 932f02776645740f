from .provider import PermissionProvider

__all__ = ["PermissionProvider"]
