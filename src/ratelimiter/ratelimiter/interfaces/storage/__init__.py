# ABOUTME: Storage interfaces package exports
# ABOUTME: Exports the abstract per-identity state store

from .state_store import AbstractStateStore

__all__ = [
    "AbstractStateStore",
]
