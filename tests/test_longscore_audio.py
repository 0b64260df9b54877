from pathlib import Path

import numpy as np
import soundfile as sf

from longscore.audio import as_samples, write_wav


def test_as_samples_flattens_without_rescaling() -> None:
    samples = as_samples([[2.0, -3.0], [0.5, 0.0]])
    assert samples.dtype == np.float32
    assert samples.tolist() == [2.0, -3.0, 0.5, 0.0]


def test_write_wav_round_trips_length(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "clip.wav"

    path = write_wav(target, np.full(800, 0.25, dtype=np.float32), sample_rate=8000)

    data, sample_rate = sf.read(path, dtype="float32")
    assert path == target
    assert sample_rate == 8000
    assert data.shape == (800,)
    assert np.allclose(data, 0.25)


def test_write_wav_scales_down_hot_audio(tmp_path: Path) -> None:
    path = write_wav(tmp_path / "hot.wav", [0.0, 2.0, -4.0], sample_rate=8000)

    data, _ = sf.read(path, dtype="float32")
    assert np.allclose(data, [0.0, 0.5, -1.0])
