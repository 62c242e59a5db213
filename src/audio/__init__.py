"""Audio capture layer.

Provides a unified interface for microphone capture on either:
- MockAudio: silence or a WAV file (for development and tests)
- HardwareAudio: the real default input device via sounddevice
"""

from audio.base import BaseAudio, CaptureConfig, RawCapture
from audio.mock_audio import MockAudio

__all__ = ["BaseAudio", "CaptureConfig", "RawCapture", "MockAudio", "get_audio"]


def get_audio(config: dict) -> BaseAudio:
    """Factory: return the appropriate audio backend based on config."""
    mode = config.get("audio_mode", "mock")

    if mode == "hardware":
        from audio.hardware_audio import HardwareAudio
        return HardwareAudio(config)
    else:
        return MockAudio(config)
