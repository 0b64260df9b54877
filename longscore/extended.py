from __future__ import annotations

import logging
from typing import Callable

import numpy as np
from pydantic import BaseModel, ConfigDict

from .audio import FloatArray, as_samples
from .blend import crossfade
from .capabilities import SegmentCapability, SubProgressCallback
from .errors import ConfigError, GenerationAbortedError, SegmentError
from .plan import GenerationPlan
from .prompts import segment_prompt

_LOGGER = logging.getLogger("longscore.extended")

ProgressFn = Callable[[float], object]
AbortCheck = Callable[[], bool]


class SegmentRequest(BaseModel):
    """One step of an extended generation, derived from the plan.

    ``start`` and ``end`` are where the segment lands in the stitched output,
    in seconds, assuming every earlier segment came back at full length.
    """

    index: int
    prompt: str
    duration: int
    start: float
    end: float

    model_config = ConfigDict(frozen=True, extra="forbid")


def plan_segments(plan: GenerationPlan, prompt: str) -> list[SegmentRequest]:
    total = plan.segment_count()
    # Each segment is blended over the last crossfade of the running buffer,
    advance = plan.segment_duration - plan.crossfade_duration
    return [
        SegmentRequest(
            index=index,
            prompt=segment_prompt(prompt, index, total),
            duration=plan.segment_duration,
            start=index * advance,
            end=index * advance + plan.segment_duration,
        )
        for index in range(total)
    ]


class _ProgressTracker:
    """Forwards only increasing progress values, clamped to [0, 1]."""

    def __init__(self, callback: ProgressFn | None) -> None:
        self._callback = callback
        self._last = -1.0

    def report(self, value: float) -> None:
        value = min(1.0, max(0.0, float(value)))
        if value <= self._last:
            return
        self._last = value
        if self._callback is not None:
            self._callback(value)

    def for_segment(self, index: int, total: int) -> SubProgressCallback:
        base = index / total

        def _on_subprogress(fraction: float) -> None:
            self.report(base + fraction / total)

        return _on_subprogress


class ExtendedGenerator:
    """Builds audio longer than a single model call by stitching segments.

    Segments are requested one after another; each new segment is crossfaded
    onto the tail of everything generated so far, and the result is cut to
    exactly ``target_duration * sample_rate`` samples.
    """

    def __init__(self, plan: GenerationPlan, sample_rate: int) -> None:
        if sample_rate <= 0:
            raise ConfigError(f"Sample rate must be positive, got {sample_rate}")
        plan.validate()
        self.plan = plan
        self.sample_rate = sample_rate

    def generate(
        self,
        capability: SegmentCapability,
        prompt: str,
        on_progress: ProgressFn | None = None,
        *,
        should_abort: AbortCheck | None = None,
    ) -> FloatArray:
        requests = plan_segments(self.plan, prompt)
        total = len(requests)
        overlap_samples = self.plan.overlap_samples(self.sample_rate)
        crossfade_samples = self.plan.crossfade_samples(self.sample_rate)
        tracker = _ProgressTracker(on_progress)
        _LOGGER.info(
            "Generating %d segments for %d-second audio", total, self.plan.target_duration
        )

        accumulated: FloatArray = np.zeros(0, dtype=np.float32)
        for request in requests:
            if should_abort is not None and should_abort():
                raise GenerationAbortedError(
                    f"Extended generation aborted before segment {request.index}"
                )
            _LOGGER.info("Generating segment %d/%d: %s", request.index + 1, total, request.prompt)
            segment = self._generate_segment(
                capability, request, tracker.for_segment(request.index, total)
            )
            if request.index == 0:
                accumulated = segment
            else:
                accumulated = crossfade(
                    accumulated, segment, overlap_samples, crossfade_samples
                )

        target_samples = self.plan.target_samples(self.sample_rate)
        if accumulated.size < target_samples:
            _LOGGER.warning(
                "Extended audio is short: %d of %d samples", accumulated.size, target_samples
            )
        else:
            accumulated = accumulated[:target_samples].copy()
        tracker.report(1.0)
        _LOGGER.info("Extended audio generation complete: %d samples", accumulated.size)
        return accumulated

    def _generate_segment(
        self,
        capability: SegmentCapability,
        request: SegmentRequest,
        on_subprogress: SubProgressCallback,
    ) -> FloatArray:
        try:
            raw = capability.generate_segment(
                request.prompt, request.duration, request.index, on_subprogress
            )
            return as_samples(raw)
        except SegmentError:
            raise
        except Exception as exc:
            raise SegmentError(request.index, exc) from exc
