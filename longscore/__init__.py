from __future__ import annotations

from .audio import SAMPLE_RATE, FloatArray, as_samples, write_wav
from .blend import apply_smoothing, crossfade
from .capabilities import BaseGenerator, ProgressCallback, SegmentCapability, SubProgressCallback
from .dispatch import BaseSegmentCapability, DispatchAdapter
from .errors import (
    ConfigError,
    GenerationAbortedError,
    GenerationError,
    LongScoreError,
    SegmentError,
)
from .extended import ExtendedGenerator, SegmentRequest, plan_segments
from .logging_utils import configure_logging as _configure_logging
from .plan import MAX_SEGMENT_SECONDS, GenerationPlan
from .prompts import segment_hint, segment_prompt
from .tone import ToneGenerator

__all__ = [
    "MAX_SEGMENT_SECONDS",
    "SAMPLE_RATE",
    "BaseGenerator",
    "BaseSegmentCapability",
    "ConfigError",
    "DispatchAdapter",
    "ExtendedGenerator",
    "FloatArray",
    "GenerationAbortedError",
    "GenerationError",
    "GenerationPlan",
    "LongScoreError",
    "ProgressCallback",
    "SegmentCapability",
    "SegmentError",
    "SegmentRequest",
    "SubProgressCallback",
    "ToneGenerator",
    "apply_smoothing",
    "as_samples",
    "crossfade",
    "plan_segments",
    "segment_hint",
    "segment_prompt",
    "write_wav",
]

__version__ = "0.1.0"

_configure_logging()
del _configure_logging
