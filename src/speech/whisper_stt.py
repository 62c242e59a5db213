"""Whisper STT backend for production use.

Uses faster-whisper for local speech-to-text transcription with greedy
decoding, so the same model, samples and language give the same text.
"""

import logging
import os

import numpy as np

from errors import ModelLoadError, TranscriptionError
from speech.base import BaseSTT

log = logging.getLogger(__name__)


def _looks_like_path(model: str) -> bool:
    """True for filesystem paths, False for bare model names like "base.en"."""
    return os.sep in model or model.startswith((".", "~"))


def _load_whisper_model(model_path: str, compute_type: str):
    """Construct the faster-whisper model (separate so tests can replace it)."""
    try:
        from faster_whisper import WhisperModel
    except ImportError as e:
        raise ModelLoadError(
            "faster-whisper is required for WhisperSTT. "
            "Install with: pip install faster-whisper"
        ) from e
    return WhisperModel(model_path, device="cpu", compute_type=compute_type)


class WhisperSTT(BaseSTT):
    """Speech-to-text using a local Whisper model via faster-whisper."""

    def __init__(self, config: dict):
        super().__init__(config)

        model_path = str(config.get("stt_model_path", "base"))
        compute_type = config.get("stt_compute_type", "int8")
        if _looks_like_path(model_path) and not os.path.exists(os.path.expanduser(model_path)):
            raise ModelLoadError(f"failed to load whisper model: {model_path} does not exist")

        log.info("Loading Whisper model: %s (compute_type=%s)", model_path, compute_type)
        try:
            self._model = _load_whisper_model(os.path.expanduser(model_path), compute_type)
        except ModelLoadError:
            raise
        except Exception as e:
            raise ModelLoadError(f"failed to load whisper model {model_path}: {e}") from e
        self._model_path = model_path

    def transcribe(self, samples: np.ndarray, language: str = "en") -> str:
        """Transcribe 16kHz mono float32 samples with greedy decoding."""
        if self._model is None:
            raise TranscriptionError("whisper model has been closed")
        audio = np.asarray(samples, dtype=np.float32).reshape(-1)
        if audio.size == 0:
            return ""

        log.info("Transcribing %d samples with Whisper (language=%s)", audio.size, language)
        try:
            segments, _info = self._model.transcribe(
                audio,
                language=language,
                beam_size=1,
                best_of=1,
                temperature=0.0,
            )
            # segments is lazy; decoding happens while iterating
            text = "".join(seg.text for seg in segments).strip()
        except Exception as e:
            raise TranscriptionError(f"whisper transcription failed: {e}") from e

        log.info("Whisper transcription: %r", text)
        return text

    def close(self) -> None:
        self._model = None
        log.info("Whisper model %s released.", self._model_path)
