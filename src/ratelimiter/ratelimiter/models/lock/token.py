# ABOUTME: LockToken model handed out by lock guards
# ABOUTME: Identifies one successful acquisition so it can be released exactly once

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class LockToken(BaseModel):
    """
    Proof of a successful lock acquisition for one identity.
    """

    identity: str = Field(description="Identity the lock protects")
    token_id: str = Field(default_factory=lambda: uuid4().hex, description="Unique acquisition id")
    acquired_at: float = Field(description="Timestamp of the acquisition")

    model_config = ConfigDict(frozen=True)
