"""Wake-phrase detection by transcribing short chunks until the phrase is heard.

The detector polls the microphone in fixed-length chunks, transcribes each
one with an already-loaded session, and looks for the trigger phrase in the
normalized text. Once triggered it records the actual command.

    LISTENING --(phrase found)--> TRIGGERED
    LISTENING --(elapsed > timeout, checked per chunk)--> TIMED_OUT
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from acquisition import record_samples
from audio.base import BaseAudio
from errors import NoAudioAfterTriggerError, WakePhraseTimeout
from speech.base import BaseSTT

log = logging.getLogger("stt-mcp.wake")

DEFAULT_WAKE_PHRASE = "hey claude code"
DEFAULT_CHUNK_DURATION = 2.0


def normalize_text(text: str) -> str:
    """Lowercase and drop every character that is not alphanumeric or whitespace."""
    return "".join(ch for ch in text.lower() if ch.isalnum() or ch.isspace())


def contains_trigger(text: str, trigger_phrase: str) -> bool:
    """Exact substring test of the normalized trigger in the normalized text."""
    return normalize_text(trigger_phrase) in normalize_text(text)


class DetectorState(Enum):
    LISTENING = "listening"
    TRIGGERED = "triggered"
    TIMED_OUT = "timed_out"


@dataclass
class DetectionState:
    """Book-keeping for one detection call."""

    started_at: float
    timeout: float
    chunk_duration: float
    trigger_phrase: str
    state: DetectorState = DetectorState.LISTENING
    chunks_heard: int = 0
    last_text: str = ""

    @property
    def timeout_deadline(self) -> float:
        return self.started_at + self.timeout

    def elapsed(self, now: float) -> float:
        return now - self.started_at


class WakePhraseDetector:
    """Poll short chunks until the trigger phrase is heard, then record a command.

    The STT session is owned by the caller and reused for every chunk.
    """

    def __init__(
        self,
        audio: BaseAudio,
        stt: BaseSTT,
        config: dict,
        clock: Callable[[], float] = time.monotonic,
    ):
        phrase = normalize_text(config.get("wake_phrase", DEFAULT_WAKE_PHRASE)).strip()
        if not phrase:
            raise ValueError("wake_phrase must contain at least one letter or digit")
        self._audio = audio
        self._stt = stt
        self._trigger_phrase = phrase
        self._chunk_duration = float(config.get("wake_chunk_duration", DEFAULT_CHUNK_DURATION))
        self._clock = clock

    @property
    def trigger_phrase(self) -> str:
        return self._trigger_phrase

    def wait_for_phrase(self, timeout: float, language: str = "en") -> DetectionState:
        """Block until the trigger phrase is heard.

        Raises WakePhraseTimeout once more than ``timeout`` seconds have
        elapsed at a chunk boundary. A chunk already being captured always
        finishes first, so the real overrun can reach one chunk length.
        Capture and transcription errors propagate and end the detection.
        """
        state = DetectionState(
            started_at=self._clock(),
            timeout=timeout,
            chunk_duration=self._chunk_duration,
            trigger_phrase=self._trigger_phrase,
        )
        log.info(
            "Listening for %r (timeout=%.0fs, chunks=%.1fs)",
            state.trigger_phrase, timeout, state.chunk_duration,
        )

        while state.state is DetectorState.LISTENING:
            elapsed = state.elapsed(self._clock())
            if elapsed > state.timeout:
                state.state = DetectorState.TIMED_OUT
                log.info("Wake phrase not heard after %.1fs (%d chunks)", elapsed, state.chunks_heard)
                raise WakePhraseTimeout(
                    f"wake phrase {state.trigger_phrase!r} not detected within {timeout:g}s"
                )

            samples = record_samples(self._audio, state.chunk_duration)
            if samples.size == 0:
                continue

            state.chunks_heard += 1
            state.last_text = self._stt.transcribe(samples, language)
            log.debug("Chunk %d heard: %r", state.chunks_heard, state.last_text)
            if state.trigger_phrase in normalize_text(state.last_text):
                state.state = DetectorState.TRIGGERED
                log.info(
                    "Wake phrase detected in chunk %d after %.1fs",
                    state.chunks_heard, state.elapsed(self._clock()),
                )

        return state

    def listen(self, record_duration: float = 5, timeout: float = 60, language: str = "en") -> str:
        """Wait for the wake phrase, then record and transcribe the command."""
        self.wait_for_phrase(timeout, language)

        samples = record_samples(self._audio, record_duration)
        if samples.size == 0:
            raise NoAudioAfterTriggerError("no audio captured after wake phrase")
        text = self._stt.transcribe(samples, language)
        log.info("Command after wake phrase: %r", text)
        return text
