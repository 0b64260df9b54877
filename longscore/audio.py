from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np
import soundfile as sf  # type: ignore[import]
from numpy.typing import NDArray

FloatArray = NDArray[np.float32]
AudioNumbers = NDArray[np.floating[Any]] | Sequence[float] | FloatArray

SAMPLE_RATE = 32_000


def as_samples(audio: AudioNumbers) -> FloatArray:
    """Flatten to a mono float32 buffer without touching the amplitude range."""

    return np.asarray(audio, dtype=np.float32).reshape(-1)


def write_wav(
    path: str | Path,
    audio: AudioNumbers,
    *,
    sample_rate: int = SAMPLE_RATE,
) -> Path:
    """Write mono float audio, scaling down only if it would clip."""

    target = Path(path)
    samples = as_samples(audio)
    if samples.size:
        peak = float(np.max(np.abs(samples)))
        if peak > 1.0:
            samples = samples / peak
    target.parent.mkdir(parents=True, exist_ok=True)
    sf.write(target, samples, sample_rate, subtype="FLOAT")
    return target
