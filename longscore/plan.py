from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigError

MAX_SEGMENT_SECONDS = 30

_LOGGER = logging.getLogger("longscore.plan")

_ENV_FIELDS: Mapping[str, str] = {
    "target_duration": "LONGSCORE_TARGET_DURATION",
    "segment_duration": "LONGSCORE_SEGMENT_DURATION",
    "overlap_duration": "LONGSCORE_OVERLAP_DURATION",
    "crossfade_duration": "LONGSCORE_CROSSFADE_DURATION",
}


class _PlanPayload(BaseModel):
    """Loose input shape for plans loaded from mappings or the environment."""

    target_duration: int = 240
    segment_duration: int = 28
    overlap_duration: int = 4
    crossfade_duration: float = 2.0

    model_config = ConfigDict(extra="forbid", frozen=True)


@dataclass(frozen=True, slots=True)
class GenerationPlan:
    """Durations (in seconds) describing how a long request is split.

    Segments advance by ``segment_duration - overlap_duration`` seconds and
    neighbours are blended over the last ``crossfade_duration`` seconds of the
    running buffer.

    Example:
        plan = GenerationPlan(target_duration=60)
        plan.validate()
        plan.segment_count()  # 3
    """

    target_duration: int = 240
    # Leave headroom below the model's 30 second ceiling.
    segment_duration: int = 28
    overlap_duration: int = 4
    crossfade_duration: float = 2.0

    def validate(self) -> None:
        if self.target_duration < 0:
            raise ConfigError("Target duration cannot be negative")
        if self.segment_duration > MAX_SEGMENT_SECONDS:
            raise ConfigError(
                f"Segment duration cannot exceed {MAX_SEGMENT_SECONDS} seconds "
                "due to model limitations"
            )
        if self.overlap_duration >= self.segment_duration:
            raise ConfigError("Overlap duration must be less than segment duration")
        if self.crossfade_duration > self.overlap_duration:
            raise ConfigError("Crossfade duration must be less than or equal to overlap duration")

    def step_duration(self) -> int:
        return self.segment_duration - self.overlap_duration

    def segment_count(self) -> int:
        step = self.step_duration()
        return max(1, -(-self.target_duration // step))

    def overlap_samples(self, sample_rate: int) -> int:
        return int(self.overlap_duration * sample_rate)

    def crossfade_samples(self, sample_rate: int) -> int:
        return int(self.crossfade_duration * sample_rate)

    def target_samples(self, sample_rate: int) -> int:
        return self.target_duration * sample_rate

    def with_target(self, seconds: int) -> "GenerationPlan":
        plan = replace(self, target_duration=seconds)
        plan.validate()
        return plan

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GenerationPlan":
        try:
            payload = _PlanPayload.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(f"Invalid generation plan: {exc}") from exc
        plan = cls(**payload.model_dump())
        plan.validate()
        return plan

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GenerationPlan":
        source = os.environ if environ is None else environ
        data: dict[str, str] = {}
        for field, variable in _ENV_FIELDS.items():
            value = source.get(variable, "").strip()
            if value:
                data[field] = value
        if data:
            _LOGGER.debug("Plan overrides from environment: %s", data)
        return cls.from_mapping(data)
