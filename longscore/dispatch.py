from __future__ import annotations

import logging
import threading

from .audio import SAMPLE_RATE, AudioNumbers, FloatArray, as_samples
from .capabilities import BaseGenerator, ProgressCallback, SubProgressCallback
from .errors import SegmentError
from .extended import ExtendedGenerator
from .plan import MAX_SEGMENT_SECONDS, GenerationPlan

_LOGGER = logging.getLogger("longscore.dispatch")


class BaseSegmentCapability:
    """Exposes a base generator as a segment capability.

    Requested durations are capped at the model limit. The base generator's
    progress is forwarded as a plain fraction and it is always told to keep
    going, so a mid-segment abort from the base side has no effect.
    """

    def __init__(self, base: BaseGenerator, *, max_seconds: int = MAX_SEGMENT_SECONDS) -> None:
        self._base = base
        self._max_seconds = max_seconds

    def generate_segment(
        self,
        prompt: str,
        duration: int,
        index: int,
        on_subprogress: SubProgressCallback,
    ) -> AudioNumbers:
        seconds = min(duration, self._max_seconds)

        def _on_progress(elapsed: float, total: float) -> bool:
            on_subprogress(elapsed / total if total > 0 else 1.0)
            return False

        try:
            return self._base.process(prompt, seconds, _on_progress)
        except Exception as exc:
            raise SegmentError(index, exc) from exc


class DispatchAdapter:
    """Routes short requests to the base generator and long ones through segments.

    Has the same ``process`` shape as a base generator, so it can stand in
    wherever one is expected.
    """

    def __init__(
        self,
        base: BaseGenerator,
        plan: GenerationPlan | None = None,
        sample_rate: int = SAMPLE_RATE,
    ) -> None:
        self._base = base
        self._plan = plan if plan is not None else GenerationPlan()
        # Fail on a bad plan or sample rate before any request is made.
        ExtendedGenerator(self._plan, sample_rate)
        self._sample_rate = sample_rate
        self._segments = BaseSegmentCapability(base)

    @property
    def plan(self) -> GenerationPlan:
        return self._plan

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def process(self, prompt: str, seconds: int, on_progress: ProgressCallback) -> FloatArray:
        if seconds <= MAX_SEGMENT_SECONDS:
            _LOGGER.debug("Direct generation for %d seconds", seconds)
            return as_samples(self._base.process(prompt, seconds, on_progress))
        return self.generate_extended(prompt, seconds, on_progress)

    def generate_extended(
        self, prompt: str, seconds: int, on_progress: ProgressCallback
    ) -> FloatArray:
        plan = self._plan.with_target(seconds)
        generator = ExtendedGenerator(plan, self._sample_rate)
        _LOGGER.info(
            "Extended generation for %d seconds in %d segments", seconds, plan.segment_count()
        )
        abort_requested = threading.Event()

        def _report(fraction: float) -> None:
            if on_progress(fraction, 1.0):
                abort_requested.set()

        return generator.generate(
            self._segments, prompt, _report, should_abort=abort_requested.is_set
        )
