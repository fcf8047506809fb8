"""Engine configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Timeouts(BaseModel):
    """Per-operation wait deadlines, in seconds."""

    create: float = Field(default=30 * 60, gt=0)
    update: float = Field(default=30 * 60, gt=0)
    delete: float = Field(default=30 * 60, gt=0)


class Backoff(BaseModel):
    """Probe spacing for the waiter.

    Without a fixed ``poll_interval``, the interval starts at ``min_interval``
    and doubles after each probe up to ``max_interval``. ``jitter`` is the
    fraction of each interval that is randomized.
    """

    delay: float = Field(default=0.0, ge=0)
    min_interval: float = Field(default=0.1, ge=0)
    max_interval: float = Field(default=10.0, ge=0)
    poll_interval: float | None = Field(default=None, ge=0)
    jitter: float = Field(default=0.1, ge=0, le=1)


class TagsConfig(BaseModel):
    """Provider-wide default tags and ignore rules."""

    default_tags: dict[str, str] = Field(default_factory=dict)
    ignore_keys: list[str] = Field(default_factory=list)
    ignore_key_prefixes: list[str] = Field(default_factory=list)


class ProviderInfo(BaseModel):
    """Where the provider is operating; used to build resource names."""

    partition: str = "aws"
    region: str = ""
    account_id: str = ""


class EngineConfig(BaseModel):
    """Top-level engine settings."""

    timeouts: Timeouts = Field(default_factory=Timeouts)
    backoff: Backoff = Field(default_factory=Backoff)
    tags: TagsConfig = Field(default_factory=TagsConfig)
    provider: ProviderInfo = Field(default_factory=ProviderInfo)
