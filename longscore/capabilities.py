from __future__ import annotations

from typing import Callable, Protocol

from .audio import AudioNumbers

SubProgressCallback = Callable[[float], None]
"""Receives a capability's own progress as a fraction in [0, 1]."""

ProgressCallback = Callable[[float, float], bool]
"""Receives ``(elapsed, total)`` and returns True to request an abort."""


class SegmentCapability(Protocol):
    def generate_segment(
        self,
        prompt: str,
        duration: int,
        index: int,
        on_subprogress: SubProgressCallback,
    ) -> AudioNumbers: ...


class BaseGenerator(Protocol):
    def process(
        self,
        prompt: str,
        seconds: int,
        on_progress: ProgressCallback,
    ) -> AudioNumbers: ...
