"""Acquisition pipeline: capture from the device, then normalize to 16kHz mono."""

import logging

import numpy as np

from audio.base import BaseAudio
from utils.audio import TARGET_SAMPLE_RATE, normalize

log = logging.getLogger("stt-mcp.acquisition")


def record_samples(audio: BaseAudio, duration: float) -> np.ndarray:
    """Capture ``duration`` seconds and return ready-to-transcribe samples.

    Returns an empty array if the device produced nothing.
    """
    raw = audio.capture(duration)
    if raw.is_empty:
        log.info("Capture produced no samples")
        return np.zeros(0, dtype=np.float32)

    samples = normalize(raw.frames, raw.sample_rate, raw.channels)
    log.info(
        "Captured %.2fs: %d samples @ %dHz x%d -> %d samples @ %dHz mono",
        raw.duration, raw.frames.size, raw.sample_rate, raw.channels, samples.size, TARGET_SAMPLE_RATE,
    )
    return samples
