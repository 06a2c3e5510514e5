# ABOUTME: Persisted per-identity state for each stateful limiter policy
# ABOUTME: Immutable pydantic models tagged by policy so stores can round-trip them

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class TokenBucketState(BaseModel):
    """
    Token bucket state.

    ``last_refill_at`` may lie in the future when a reservation has been handed
    out; until that moment the bucket is in debt and holds no usable tokens.
    """

    policy: Literal["token_bucket"] = "token_bucket"
    available_tokens: float = Field(ge=0, description="Tokens left at last_refill_at")
    last_refill_at: float = Field(description="Timestamp of the last refill computation")

    model_config = ConfigDict(frozen=True)


class FixedWindowState(BaseModel):
    """
    Fixed window state: hits counted since ``window_start_at``.
    """

    policy: Literal["fixed_window"] = "fixed_window"
    hits: int = Field(ge=0, description="Units consumed in the window")
    window_start_at: float = Field(description="Timestamp at which the window opened")

    model_config = ConfigDict(frozen=True)


class SlidingWindowState(BaseModel):
    """
    Sliding window state: the current window plus the hit count of the window
    immediately before it.
    """

    policy: Literal["sliding_window"] = "sliding_window"
    current_hits: int = Field(ge=0, description="Units consumed in the current window")
    current_window_start_at: float = Field(description="Timestamp at which the current window opened")
    previous_hits: int = Field(default=0, ge=0, description="Units consumed in the adjacent previous window")

    model_config = ConfigDict(frozen=True)


PolicyState = Annotated[
    Union[TokenBucketState, FixedWindowState, SlidingWindowState],
    Field(discriminator="policy"),
]

_policy_state_adapter: TypeAdapter = TypeAdapter(PolicyState)


def parse_policy_state(data: dict[str, Any]) -> TokenBucketState | FixedWindowState | SlidingWindowState:
    """Rebuild a policy state from its ``model_dump()`` form.

    Intended for stores that persist states as plain mappings (JSON, hashes).

    Raises:
        pydantic.ValidationError: If the mapping does not describe a known state.
    """
    return _policy_state_adapter.validate_python(data)
