# ABOUTME: Implementations package
# ABOUTME: Groups the in-memory and no-op variants of the storage and lock contracts
