# ABOUTME: Common type definitions shared across the rate limiter
# ABOUTME: Provides the clock alias and the duration input alias

from datetime import timedelta
from typing import Callable, Union

# Returns the current time in seconds. Wall clock (time.time) and monotonic
# clocks both work as long as one limiter and its store share the same clock.
Clock = Callable[[], float]

# Accepted by the option resolver; the core only ever sees float seconds.
DurationInput = Union[timedelta, int, float, str]
