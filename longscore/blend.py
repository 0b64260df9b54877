"""Sample-domain blending used to stitch consecutive segments together."""

from __future__ import annotations

import logging

import numpy as np

from .audio import AudioNumbers, FloatArray, as_samples

_LOGGER = logging.getLogger("longscore.blend")


def crossfade(
    head: AudioNumbers,
    tail: AudioNumbers,
    overlap_samples: int,
    crossfade_samples: int,
) -> FloatArray:
    """Blend ``tail`` onto the end of ``head`` with a linear crossfade.

    The last ``crossfade_samples`` of ``head`` are interpolated towards the
    first samples of ``tail``; the rest of ``tail`` is appended after them. When
    ``head`` is shorter than ``overlap_samples`` there is nothing to overlap and
    the two buffers are simply concatenated.

    The ramp is linear in amplitude, so energy dips in the middle of the fade
    for uncorrelated material.
    """

    first = as_samples(head)
    second = as_samples(tail)
    if first.size < overlap_samples:
        _LOGGER.debug(
            "Crossfade fallback: %d samples available, %d needed for overlap",
            first.size,
            overlap_samples,
        )
        return np.concatenate((first, second))

    start = max(0, first.size - crossfade_samples)
    consumed = min(crossfade_samples, second.size)
    blend_len = min(consumed, first.size - start)

    mixed = first.copy()
    if blend_len > 0:
        ramp = np.arange(blend_len, dtype=np.float32) / np.float32(crossfade_samples)
        end = start + blend_len
        mixed[start:end] = mixed[start:end] * (1.0 - ramp) + second[:blend_len] * ramp

    return np.concatenate((mixed, second[consumed:]))


def apply_smoothing(audio: AudioNumbers, window_size: int) -> FloatArray:
    """Fade both ends of a buffer over ``window_size`` samples to avoid clicks.

    Buffers shorter than two windows are returned unchanged.
    """

    samples = as_samples(audio)
    if window_size <= 0 or samples.size < window_size * 2:
        return samples

    smoothed = samples.copy()
    fade_in = np.arange(window_size, dtype=np.float32) / np.float32(window_size)
    fade_out = (window_size - np.arange(window_size, dtype=np.float32)) / np.float32(window_size)
    smoothed[:window_size] *= fade_in
    # Fade-out runs forward in time: full gain at the window start, quietest last sample.
    smoothed[-window_size:] *= fade_out
    return smoothed
