# ABOUTME: Immutable limiter configuration consumed by the policies
# ABOUTME: Contains the Rate refill model and the validated LimiterConfig

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ratelimiter.models.policy.enum import PolicyType


class Rate(BaseModel):
    """
    Refill rate of a token bucket: ``amount`` tokens every ``interval`` seconds.

    Refill is continuous, so half an interval yields half the amount.
    """

    amount: int = Field(default=1, gt=0, description="Tokens added per interval")
    interval: float = Field(gt=0, description="Refill interval in seconds")

    model_config = ConfigDict(frozen=True)

    def tokens_for_time(self, seconds: float) -> float:
        """Tokens refilled over ``seconds`` (negative for negative spans)."""
        return seconds * self.amount / self.interval

    def time_for_tokens(self, tokens: float) -> float:
        """Seconds needed to refill ``tokens``."""
        return tokens * self.interval / self.amount


class LimiterConfig(BaseModel):
    """
    Validated configuration of one limiter family.

    All durations are float seconds. Policy-specific requirements are checked at
    construction, so a LimiterConfig instance is always usable by its policy.

    Attributes:
        id: Prefix of every identity produced from this configuration.
        policy: Which algorithm decides admissions.
        limit: Maximum units per window, or the burst ceiling of a token bucket.
        interval: Window length (fixed and sliding window policies).
        rate: Refill rate (token bucket policy).
    """

    id: str = Field(min_length=1, description="Identity prefix")
    policy: PolicyType = Field(description="Limiter algorithm")
    limit: Optional[int] = Field(default=None, gt=0, description="Maximum units per window or bucket")
    interval: Optional[float] = Field(default=None, gt=0, description="Window length in seconds")
    rate: Optional[Rate] = Field(default=None, description="Token bucket refill rate")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_policy_requirements(self) -> "LimiterConfig":
        if self.policy is PolicyType.NO_LIMIT:
            return self

        if self.limit is None:
            raise ValueError(f'policy "{self.policy.value}" requires "limit"')

        if self.policy is PolicyType.TOKEN_BUCKET:
            if self.rate is None:
                raise ValueError('policy "token_bucket" requires "rate" with an "interval"')
        elif self.interval is None:
            raise ValueError(f'policy "{self.policy.value}" requires "interval"')

        return self
