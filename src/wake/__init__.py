"""Wake-phrase detection on top of chunked transcription."""

from wake.phrase import (
    DEFAULT_WAKE_PHRASE,
    DetectionState,
    DetectorState,
    WakePhraseDetector,
    contains_trigger,
    normalize_text,
)

__all__ = [
    "DEFAULT_WAKE_PHRASE",
    "DetectionState",
    "DetectorState",
    "WakePhraseDetector",
    "contains_trigger",
    "normalize_text",
]
