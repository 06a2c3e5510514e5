# ABOUTME: NoOp storage implementations package
# ABOUTME: Exports the state store that keeps nothing

from .state_store import NoOpStateStore

__all__ = ["NoOpStateStore"]
