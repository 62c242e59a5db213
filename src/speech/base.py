"""Abstract base class for speech-to-text sessions."""

from abc import ABC, abstractmethod

import numpy as np


class BaseSTT(ABC):
    """A loaded speech model, reusable across many transcribe calls.

    Input is 16kHz mono float32 samples in [-1.0, 1.0].
    Output is the transcribed text, trimmed; silence yields "".
    """

    def __init__(self, config: dict):
        self._config = config

    @abstractmethod
    def transcribe(self, samples: np.ndarray, language: str = "en") -> str:
        """Transcribe normalized samples to text.

        Args:
            samples: float32 samples, 16kHz mono.
            language: Language hint, e.g. "en", "es", "fr".

        Returns:
            Transcribed text string.
        """
        ...

    def close(self) -> None:
        """Clean up resources. Override if needed."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
