from __future__ import annotations

import logging
import math
import zlib

import numpy as np

from .audio import SAMPLE_RATE, FloatArray
from .capabilities import ProgressCallback
from .errors import GenerationAbortedError, GenerationError
from .plan import MAX_SEGMENT_SECONDS

_LOGGER = logging.getLogger("longscore.tone")

# Minor pentatonic offsets in semitones above A2.
_SCALE = (0, 3, 5, 7, 10, 12, 15)
_BASE_FREQ = 110.0


def prompt_frequency(prompt: str) -> float:
    """Map prompt text to a stable pitch in the pentatonic scale."""

    digest = zlib.crc32(prompt.strip().lower().encode("utf-8"))
    semitones = _SCALE[digest % len(_SCALE)]
    return _BASE_FREQ * 2.0 ** (semitones / 12.0)


class ToneGenerator:
    """Deterministic pad synth with the same contract as a model backend.

    Renders in blocks and reports ``(blocks_done, blocks_total)`` after each
    one; a truthy return from the callback stops generation.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        *,
        max_seconds: int = MAX_SEGMENT_SECONDS,
        block_seconds: float = 1.0,
        amplitude: float = 0.3,
    ) -> None:
        self.sample_rate = sample_rate
        self.max_seconds = max_seconds
        self.block_seconds = block_seconds
        self.amplitude = amplitude

    def process(self, prompt: str, seconds: int, on_progress: ProgressCallback) -> FloatArray:
        if seconds < 0:
            raise GenerationError(f"Duration cannot be negative: {seconds}")
        if seconds > self.max_seconds:
            raise GenerationError(
                f"Requested {seconds}s exceeds the {self.max_seconds}s generation limit"
            )

        total_samples = int(seconds * self.sample_rate)
        block_samples = max(1, int(self.block_seconds * self.sample_rate))
        num_blocks = max(1, math.ceil(total_samples / block_samples))
        freq = prompt_frequency(prompt)
        _LOGGER.debug("Tone %.1f Hz for %ds (%d blocks)", freq, seconds, num_blocks)

        blocks: list[FloatArray] = []
        for block in range(num_blocks):
            start = block * block_samples
            stop = min(start + block_samples, total_samples)
            blocks.append(self._render(freq, start, stop))
            if on_progress(float(block + 1), float(num_blocks)):
                raise GenerationAbortedError(f"Tone generation aborted at block {block + 1}")

        if not blocks:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(blocks)

    def _render(self, freq: float, start: int, stop: int) -> FloatArray:
        t = np.arange(start, stop, dtype=np.float64) / self.sample_rate
        root = np.sin(2.0 * np.pi * freq * t)
        fifth = 0.5 * np.sin(2.0 * np.pi * freq * 1.5 * t)
        swell = 0.75 + 0.25 * np.sin(2.0 * np.pi * 0.25 * t)
        return (self.amplitude * swell * (root + fifth) / 1.5).astype(np.float32)
