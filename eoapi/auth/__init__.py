from .manager import AuthorizationManager, ReadWriteLock

__all__ = ["AuthorizationManager", "ReadWriteLock"]
