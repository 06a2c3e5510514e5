# ABOUTME: Components package
# ABOUTME: Groups the policy functions and the limiter orchestration built on them
