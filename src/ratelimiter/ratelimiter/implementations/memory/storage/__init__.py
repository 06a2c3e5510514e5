# ABOUTME: In-memory storage implementations package
# ABOUTME: Exports the process-local state store

from .state_store import InMemoryStateStore

__all__ = ["InMemoryStateStore"]
