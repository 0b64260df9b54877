from __future__ import annotations

import numpy as np
import pytest

from longscore.blend import apply_smoothing, crossfade


def test_crossfade_scenario_length_and_midpoint() -> None:
    head = np.ones(10_000, dtype=np.float32)
    tail = np.zeros(10_000, dtype=np.float32)

    result = crossfade(head, tail, 2000, 1000)

    assert result.shape == (19_000,)
    fade = result[9000:10_000]
    assert np.all((fade >= 0.0) & (fade <= 1.0))
    assert np.all((fade[1:] > 0.0) & (fade[1:] < 1.0))
    assert result[9500] == pytest.approx(0.5)
    assert np.all(result[:9000] == 1.0)
    assert np.all(result[10_000:] == 0.0)


def test_crossfade_ramp_is_linear_and_falling() -> None:
    result = crossfade(np.ones(100), np.zeros(100), 20, 10)
    fade = result[90:100]
    assert np.allclose(fade, 1.0 - np.arange(10) / 10.0)


def test_crossfade_does_not_mutate_inputs() -> None:
    head = np.ones(50, dtype=np.float32)
    tail = np.zeros(50, dtype=np.float32)
    crossfade(head, tail, 10, 10)
    assert np.all(head == 1.0)
    assert np.all(tail == 0.0)


def test_crossfade_blends_are_convex_combinations() -> None:
    rng = np.random.default_rng(7)
    head = rng.uniform(-2.0, 2.0, 500).astype(np.float32)
    tail = rng.uniform(-2.0, 2.0, 300).astype(np.float32)

    result = crossfade(head, tail, 120, 80)

    assert result.size == head.size + tail.size - 80
    blended = result[420:500]
    low = np.minimum(head[420:500], tail[:80]) - 1e-6
    high = np.maximum(head[420:500], tail[:80]) + 1e-6
    assert np.all((blended >= low) & (blended <= high))
    assert np.array_equal(result[:420], head[:420])
    assert np.array_equal(result[500:], tail[80:])


def test_crossfade_falls_back_to_concatenation_when_head_too_short() -> None:
    head = np.full(1000, 0.25, dtype=np.float32)
    tail = np.full(5000, -0.5, dtype=np.float32)

    result = crossfade(head, tail, 2000, 1000)

    assert result.size == 6000
    assert np.array_equal(result, np.concatenate((head, tail)))


def test_crossfade_with_short_tail_only_blends_available_samples() -> None:
    head = np.ones(10, dtype=np.float32)
    tail = np.zeros(3, dtype=np.float32)

    result = crossfade(head, tail, 4, 5)

    assert result.size == 10
    assert np.allclose(result[5:8], [1.0, 0.8, 0.6])
    assert np.all(result[8:] == 1.0)


def test_crossfade_with_zero_fade_concatenates() -> None:
    result = crossfade([1.0, 1.0, 1.0], [0.0, 0.0], 2, 0)
    assert result.tolist() == [1.0, 1.0, 1.0, 0.0, 0.0]


def test_crossfade_accepts_plain_sequences() -> None:
    result = crossfade([1.0] * 8, [0.0] * 8, 4, 4)
    assert result.dtype == np.float32
    assert result.size == 12


def test_smoothing_is_noop_for_short_buffers() -> None:
    audio = np.ones(5, dtype=np.float32)
    assert np.array_equal(apply_smoothing(audio, 3), audio)


def test_smoothing_ramps_both_ends() -> None:
    audio = np.ones(10, dtype=np.float32)

    smoothed = apply_smoothing(audio, 3)

    assert smoothed[0] == 0.0
    assert np.allclose(smoothed[:3], [0.0, 1 / 3, 2 / 3])
    assert np.all(smoothed[3:7] == 1.0)
    assert np.allclose(smoothed[7:], [1.0, 2 / 3, 1 / 3])
    assert abs(smoothed[-1]) < abs(audio[-1])
    assert np.all(audio == 1.0)


def test_smoothing_applies_at_exactly_two_windows() -> None:
    smoothed = apply_smoothing(np.ones(6, dtype=np.float32), 3)
    assert np.allclose(smoothed, [0.0, 1 / 3, 2 / 3, 1.0, 2 / 3, 1 / 3])


def test_smoothing_with_zero_window_is_noop() -> None:
    audio = np.array([0.5, -0.5], dtype=np.float32)
    assert np.array_equal(apply_smoothing(audio, 0), audio)


def test_smoothing_fade_out_decreases_toward_the_last_sample() -> None:
    # Indexing the ramp from the end inward would leave the final sample at
    # full gain and drop to 1/w at the window start; the fade runs forward.
    smoothed = apply_smoothing(np.ones(10, dtype=np.float32), 3)

    tail = smoothed[7:]
    assert np.allclose(tail, [1.0, 2 / 3, 1 / 3])
    assert not np.allclose(tail, [1 / 3, 2 / 3, 1.0])
    assert np.all(np.diff(smoothed[6:]) <= 0.0)
    assert smoothed[-1] == pytest.approx(1 / 3)
