"""Signal normalization: downmix to mono and resample to 16kHz."""

import numpy as np

from audio.base import TARGET_SAMPLE_RATE


def downmix_to_mono(frames: np.ndarray, channels: int) -> np.ndarray:
    """Average interleaved multi-channel frames into a single channel.

    A trailing partial frame is dropped.
    """
    samples = np.asarray(frames, dtype=np.float32).reshape(-1)
    if channels <= 1:
        return samples
    whole = samples.size - samples.size % channels
    return samples[:whole].reshape(-1, channels).mean(axis=1, dtype=np.float64).astype(np.float32)


def resample_linear(
    samples: np.ndarray,
    source_rate: int,
    target_rate: int = TARGET_SAMPLE_RATE,
) -> np.ndarray:
    """Resample mono samples from source_rate to target_rate using linear interpolation.

    Output length is ceil(len(samples) / ratio) with ratio = source_rate / target_rate.
    Output sample i reads source position i * ratio, interpolating between its
    two neighbours, or repeating the last input sample past the end.
    """
    samples = np.asarray(samples, dtype=np.float32).reshape(-1)
    if source_rate == target_rate or samples.size == 0:
        return samples

    ratio = source_rate / target_rate
    n = samples.size
    # ceil(n / ratio), in integers so float error never adds a sample
    out_len = -(-n * target_rate // source_rate)

    positions = np.arange(out_len, dtype=np.float64) * ratio
    idx = np.floor(positions).astype(np.int64)
    frac = positions - idx
    nxt = idx + 1

    source = samples.astype(np.float64)
    out = np.empty(out_len, dtype=np.float64)
    inside = nxt < n
    out[inside] = source[idx[inside]] * (1.0 - frac[inside]) + source[nxt[inside]] * frac[inside]
    out[~inside] = source[np.minimum(idx[~inside], n - 1)]
    return out.astype(np.float32)


def normalize(frames: np.ndarray, native_rate: int, channels: int) -> np.ndarray:
    """Turn a raw device capture into 16kHz mono float32 samples."""
    mono = downmix_to_mono(frames, channels)
    return resample_linear(mono, native_rate, TARGET_SAMPLE_RATE)
