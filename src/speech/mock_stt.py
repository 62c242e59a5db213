"""Mock STT backend for local development.

Returns a configurable canned response, ignoring actual audio input.
"""

import logging

import numpy as np

from speech.base import BaseSTT

log = logging.getLogger(__name__)


class MockSTT(BaseSTT):
    """Fake STT that returns a fixed string for development."""

    def __init__(self, config: dict):
        super().__init__(config)
        self._response = config.get("stt_mock_response", "hello world")

    def transcribe(self, samples: np.ndarray, language: str = "en") -> str:
        """Return the configured canned response, ignoring audio."""
        log.info("Mock transcribe called with %d samples (language=%s)", len(samples), language)
        return self._response
