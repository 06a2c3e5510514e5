# ABOUTME: Lock models package exports
# ABOUTME: Exports the token returned by lock guards

from .token import LockToken

__all__ = ["LockToken"]
