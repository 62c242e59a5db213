"""Abstract base class for all audio capture backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import numpy as np

# Whisper's preferred input format
TARGET_SAMPLE_RATE = 16000

SUPPORTED_DTYPES = ("float32", "int16")


@dataclass(frozen=True)
class CaptureConfig:
    """Device settings fixed for the lifetime of one capture call."""

    native_sample_rate: int
    channel_count: int
    capture_duration: float

    def __post_init__(self):
        if self.channel_count < 1:
            raise ValueError(f"channel_count must be >= 1, got {self.channel_count}")


@dataclass
class RawCapture:
    """Interleaved float32 frames at the device's native rate and channel count.

    ``error`` holds the last asynchronous driver status seen during capture,
    if any. It is informational; the frames captured up to that point are kept.
    """

    frames: np.ndarray
    sample_rate: int
    channels: int
    error: str | None = field(default=None)

    @property
    def is_empty(self) -> bool:
        return self.frames.size == 0

    @property
    def duration(self) -> float:
        if self.sample_rate <= 0 or self.channels <= 0:
            return 0.0
        return self.frames.size / (self.sample_rate * self.channels)


class BaseAudio(ABC):
    """Common interface for mock and hardware capture backends."""

    @abstractmethod
    def capture(self, duration: float) -> RawCapture:
        """Record from the input device for ``duration`` seconds.

        Holds the device for the whole call and releases it before returning,
        on success and on error alike.
        """
        ...

    def close(self) -> None:
        """Clean up resources. Override if needed."""
        pass
