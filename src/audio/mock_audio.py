"""Mock audio backend for local development.

Captures silence (or the contents of a configured WAV file) without
touching any hardware and without sleeping, which keeps tests fast.
"""

import logging
import wave
from pathlib import Path

import numpy as np

from audio.base import TARGET_SAMPLE_RATE, BaseAudio, RawCapture

log = logging.getLogger(__name__)


class MockAudio(BaseAudio):
    """File-based capture backend for development without hardware."""

    def __init__(self, config: dict):
        self._sample_rate = config.get("audio_sample_rate") or TARGET_SAMPLE_RATE
        self._channels = config.get("audio_channels") or 1
        self._mock_input_file = config.get("audio_mock_input_file")

    def capture(self, duration: float) -> RawCapture:
        """Return frames from the mock input WAV file, or silence."""
        if self._mock_input_file:
            path = Path(self._mock_input_file)
            if path.exists():
                log.info("Mock capture from %s", path)
                return _read_wav(path, duration)
            log.warning("Mock input file not found: %s, returning silence", path)

        num_samples = int(self._sample_rate * duration) * self._channels
        log.info("Mock capture of %.1fs silence (%d samples)", duration, num_samples)
        return RawCapture(
            frames=np.zeros(num_samples, dtype=np.float32),
            sample_rate=self._sample_rate,
            channels=self._channels,
        )


def _read_wav(path: Path, duration: float) -> RawCapture:
    """Read at most ``duration`` seconds of a 16-bit WAV file as float frames."""
    with wave.open(str(path), "rb") as wf:
        if wf.getsampwidth() != 2:
            raise ValueError(f"{path}: only 16-bit WAV files are supported")
        rate = wf.getframerate()
        channels = wf.getnchannels()
        pcm = wf.readframes(int(rate * duration))
    frames = np.frombuffer(pcm, dtype="<i2").astype(np.float32) / 32767.0
    return RawCapture(frames=frames, sample_rate=rate, channels=channels)
