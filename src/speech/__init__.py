"""Speech-to-text layer.

Two ways to use a backend:
- session: load_stt(config) once, then transcribe() many times
- one-shot: transcribe_once(config, samples, language)
"""

import numpy as np

from speech.base import BaseSTT
from speech.mock_stt import MockSTT

__all__ = ["BaseSTT", "MockSTT", "load_stt", "transcribe_once"]


def load_stt(config: dict) -> BaseSTT:
    """Factory: load the STT backend selected by config and return the session."""
    mode = config.get("stt_mode", "mock")

    if mode == "whisper":
        from speech.whisper_stt import WhisperSTT
        return WhisperSTT(config)
    else:
        return MockSTT(config)


def transcribe_once(config: dict, samples: np.ndarray, language: str = "en") -> str:
    """Load a model, transcribe one buffer, and release the model."""
    with load_stt(config) as stt:
        return stt.transcribe(samples, language)
